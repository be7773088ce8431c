"""Custom exception hierarchy for starkcache."""

from __future__ import annotations

from typing import Any


class StarkCacheError(Exception):
    """Base exception for all starkcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class PrimitiveComputationError(StarkCacheError):
    """The hash primitive failed for an operand pair. Never retried here.

    Also raised when the primitive returns something that is not a valid digest.
    """

    def __init__(
        self,
        message: str = "",
        left: int | None = None,
        right: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.left = left
        self.right = right
        self.original = original


class InvalidOperandError(StarkCacheError):
    """Operand cannot be turned into a cache key (negative, non-integer, bool)."""

    def __init__(self, message: str = "", value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class CatalogError(StarkCacheError):
    """Unknown asset symbol or inconsistent asset catalog."""

    def __init__(self, message: str = "", symbol: str | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol


class ConfigurationError(StarkCacheError):
    """Missing or unresolvable configuration (e.g. hash function import path)."""

    def __init__(self, message: str = "", key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
