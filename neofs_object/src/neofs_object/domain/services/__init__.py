"""Domain services."""

from neofs_object.domain.services.attribute_validator import AttributeValidator
from neofs_object.domain.services.identity_deriver import IdentityDeriver
from neofs_object.domain.services.split_assembler import (
    STRATEGY_CHAIN,
    STRATEGY_LINK,
    SplitChainAssembler,
)
from neofs_object.domain.services.splitter import (
    DEFAULT_MAX_OBJECT_SIZE,
    ObjectSplitter,
    SplitResult,
)

__all__ = [
    "AttributeValidator",
    "IdentityDeriver",
    "SplitChainAssembler",
    "STRATEGY_CHAIN",
    "STRATEGY_LINK",
    "ObjectSplitter",
    "SplitResult",
    "DEFAULT_MAX_OBJECT_SIZE",
]
