"""Unit tests for object model configuration."""

import pytest
from pydantic import ValidationError

from neofs_object.infrastructure.config import (
    AssemblyConfig,
    Config,
    FetchConfig,
    LimitsConfig,
)


@pytest.mark.unit
class TestConfig:
    """Test configuration loading and validation."""

    def test_default_config(self):
        """Test default configuration values."""
        config = Config()
        assert config.limits.max_object_size == 64 * 1024 * 1024
        assert config.limits.verify_part_identity is True
        assert config.assembly.max_parallel_fetches == 8
        assert config.observability.log_format == "json"

    def test_fetch_config_defaults(self):
        """Test fetch retry defaults."""
        fetch_config = FetchConfig()
        assert fetch_config.max_attempts == 3
        assert fetch_config.backoff_base_seconds == 0.05
        assert fetch_config.backoff_max_seconds == 1.0

    def test_env_override(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("NEOFS_OBJECT_ASSEMBLY_MAX_PARALLEL_FETCHES", "4")
        assert AssemblyConfig().max_parallel_fetches == 4

    def test_rejects_invalid_values(self):
        """Test field constraints."""
        with pytest.raises(ValidationError):
            FetchConfig(max_attempts=0)
        with pytest.raises(ValidationError):
            LimitsConfig(max_object_size=0)
