"""Configuration management for the object model using Pydantic Settings."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LimitsConfig(BaseSettings):
    """Object limits and verification."""

    model_config = SettingsConfigDict(env_prefix="NEOFS_OBJECT_LIMITS_")

    max_object_size: int = Field(default=64 * 1024 * 1024, gt=0)
    verify_part_identity: bool = True


class AssemblyConfig(BaseSettings):
    """Split-chain assembly configuration."""

    model_config = SettingsConfigDict(env_prefix="NEOFS_OBJECT_ASSEMBLY_")

    max_parallel_fetches: int = Field(default=8, ge=1)
    max_chain_length: int = Field(default=100_000, ge=1)


class FetchConfig(BaseSettings):
    """Retry policy for fetching parts from storage."""

    model_config = SettingsConfigDict(env_prefix="NEOFS_OBJECT_FETCH_")

    max_attempts: int = Field(default=3, ge=1)
    backoff_base_seconds: float = Field(default=0.05, ge=0)
    backoff_max_seconds: float = Field(default=1.0, ge=0)


class ObservabilityConfig(BaseSettings):
    """Observability configuration."""

    model_config = SettingsConfigDict(env_prefix="NEOFS_OBJECT_OBSERVABILITY_")

    log_level: str = "info"
    log_format: str = "json"
    metrics_port: int = 8010
    otlp_endpoint: str = ""
    environment: str = "development"


class Config(BaseSettings):
    """Root configuration for the object model."""

    model_config = SettingsConfigDict(
        env_prefix="NEOFS_OBJECT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    assembly: AssemblyConfig = Field(default_factory=AssemblyConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config()
