"""Cache subsystem: order-sensitive memoization of the hash primitive."""

from starkcache.cache.keys import CacheKey, generate_cache_key, operand_key
from starkcache.cache.memory import HashCache, HashPrimitive
from starkcache.cache.stats import CacheStats

__all__ = [
    "HashCache",
    "HashPrimitive",
    "CacheKey",
    "CacheStats",
    "generate_cache_key",
    "operand_key",
]
