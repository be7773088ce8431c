"""Cache key canonicalization: collision-free, order-sensitive."""

from __future__ import annotations

from typing import NamedTuple

from starkcache.errors.exceptions import InvalidOperandError


class CacheKey(NamedTuple):
    """Canonical (left, right) pair. ``(a, b)`` and ``(b, a)`` are distinct keys."""

    left: str
    right: str


def operand_key(value: object) -> str:
    """Canonical lowercase hex of an operand, no prefix and no padding.

    Distinct non-negative integers always map to distinct strings.
    """
    # bool is an int subclass and True would collide with 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOperandError(
            f"Operand must be a non-negative int, got {type(value).__name__}",
            value=value,
        )
    if value < 0:
        raise InvalidOperandError(f"Operand must be non-negative, got {value}", value=value)
    return format(value, "x")


def generate_cache_key(left: object, right: object) -> CacheKey:
    """Build the cache key for an ordered operand pair."""
    return CacheKey(operand_key(left), operand_key(right))
