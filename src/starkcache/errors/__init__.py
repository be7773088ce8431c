"""Error handling: exception hierarchy for cache and warm-up failures."""

from starkcache.errors.exceptions import (
    CatalogError,
    ConfigurationError,
    InvalidOperandError,
    PrimitiveComputationError,
    StarkCacheError,
)

__all__ = [
    "StarkCacheError",
    "PrimitiveComputationError",
    "InvalidOperandError",
    "CatalogError",
    "ConfigurationError",
]
