"""In-memory memoization table for the Pedersen hash primitive."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator

from starkcache.cache.keys import CacheKey, generate_cache_key, operand_key
from starkcache.cache.stats import CacheStats
from starkcache.errors.exceptions import (
    ConfigurationError,
    InvalidOperandError,
    PrimitiveComputationError,
)

logger = logging.getLogger(__name__)

HashPrimitive = Callable[[int, int], Awaitable[int] | int]


class HashCache:
    """Two-level, append-only cache: left operand → right operand → digest.

    Keys are order-sensitive. Entries are write-once and never evicted; the
    table lives as long as the instance.

    Concurrent callers racing on the same uncached key await a single
    in-flight task when ``collapse_in_flight`` is set. Without it each caller
    may invoke the primitive, which is wasteful but harmless since the
    primitive is pure.
    """

    def __init__(
        self,
        primitive: HashPrimitive,
        max_concurrency: int | None = None,
        collapse_in_flight: bool = True,
    ) -> None:
        if max_concurrency is not None and (
            isinstance(max_concurrency, bool)
            or not isinstance(max_concurrency, int)
            or max_concurrency < 1
        ):
            raise ConfigurationError(
                f"max_concurrency must be a positive int, got {max_concurrency!r}",
                key="max_concurrency",
            )
        self._primitive = primitive
        self._table: dict[str, dict[str, int]] = {}
        self._in_flight: dict[CacheKey, asyncio.Task[int]] = {}
        self._collapse = collapse_in_flight
        self._max_concurrency = max_concurrency
        self._semaphore: asyncio.Semaphore | None = None
        self._stats = CacheStats()

    async def get_or_compute(self, left: int, right: int) -> int:
        """Return the digest for ``(left, right)``, invoking the primitive on a miss."""
        key = generate_cache_key(left, right)

        row = self._table.get(key.left)
        if row is not None and key.right in row:
            self._stats.hits += 1
            return row[key.right]

        self._stats.misses += 1

        if not self._collapse:
            return await self._compute(key, left, right)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._compute_in_flight(key, left, right))
            self._in_flight[key] = task
        else:
            self._stats.collapsed += 1
        # Cancelling one waiter must not cancel the computation others share
        return await asyncio.shield(task)

    def peek(self, left: int, right: int) -> int | None:
        """Return the cached digest without invoking the primitive."""
        key = generate_cache_key(left, right)
        row = self._table.get(key.left)
        if row is None:
            return None
        return row.get(key.right)

    def contains(self, left: int, right: int) -> bool:
        return self.peek(left, right) is not None

    def keys(self) -> Iterator[CacheKey]:
        """Iterate over cached keys as canonical hex pairs."""
        for left_hex, row in self._table.items():
            for right_hex in row:
                yield CacheKey(left_hex, right_hex)

    def stats(self) -> CacheStats:
        return self._stats.model_copy(update={"entries": len(self)})

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def __len__(self) -> int:
        return sum(len(row) for row in self._table.values())

    async def _compute_in_flight(self, key: CacheKey, left: int, right: int) -> int:
        try:
            return await self._compute(key, left, right)
        finally:
            self._in_flight.pop(key, None)

    async def _compute(self, key: CacheKey, left: int, right: int) -> int:
        digest = await self._invoke(left, right)
        # Last write wins; the primitive is pure so racing writes are identical
        self._table.setdefault(key.left, {})[key.right] = digest
        return digest

    async def _invoke(self, left: int, right: int) -> int:
        semaphore = self._get_semaphore()
        self._stats.computations += 1
        logger.debug("Computing hash for (%x, %x)", left, right)
        try:
            if semaphore is None:
                digest = await self._call_primitive(left, right)
            else:
                async with semaphore:
                    digest = await self._call_primitive(left, right)
        except Exception as exc:
            self._stats.failures += 1
            logger.warning("Hash primitive failed for (%x, %x): %s", left, right, exc)
            raise PrimitiveComputationError(
                f"Hash primitive failed for ({left:#x}, {right:#x}): {exc}",
                left=left,
                right=right,
                original=exc,
            ) from exc

        try:
            operand_key(digest)
        except InvalidOperandError as exc:
            self._stats.failures += 1
            raise PrimitiveComputationError(
                f"Hash primitive returned an invalid digest for ({left:#x}, {right:#x}): {digest!r}",
                left=left,
                right=right,
                original=exc,
            ) from exc
        return digest

    async def _call_primitive(self, left: int, right: int) -> int:
        result = self._primitive(left, right)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _get_semaphore(self) -> asyncio.Semaphore | None:
        # Created lazily so it binds to the running loop
        if self._max_concurrency is not None and self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self._max_concurrency)
        return self._semaphore
