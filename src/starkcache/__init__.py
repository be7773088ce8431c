"""starkcache: memoized Pedersen hashing for StarkEx-style signing."""

from starkcache.cache.memory import HashCache
from starkcache.core import StarkCache
from starkcache.errors.exceptions import (
    CatalogError,
    ConfigurationError,
    InvalidOperandError,
    PrimitiveComputationError,
    StarkCacheError,
)
from starkcache.precompute.warmup import Precomputer
from starkcache.types import AssetCatalog, WarmUpReport

__all__ = [
    "AssetCatalog",
    "CatalogError",
    "ConfigurationError",
    "HashCache",
    "InvalidOperandError",
    "Precomputer",
    "PrimitiveComputationError",
    "StarkCache",
    "StarkCacheError",
    "WarmUpReport",
]
