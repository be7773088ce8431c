"""Warm-up: fan out the known hash chains concurrently into the cache."""

from __future__ import annotations

import asyncio
import logging
import time

from starkcache.cache.memory import HashCache
from starkcache.precompute.chains import conditional_transfer_key, order_chain_roots
from starkcache.types import AssetCatalog, WarmUpReport

logger = logging.getLogger(__name__)


class Precomputer:
    """Pre-compute commonly used hashes.

    Every asset chain and the conditional-transfer hash run concurrently.
    Within one chain the second level waits for both first-level digests.
    """

    def __init__(self, cache: HashCache, catalog: AssetCatalog) -> None:
        self._cache = cache
        self._catalog = catalog

    @property
    def cache(self) -> HashCache:
        return self._cache

    @property
    def catalog(self) -> AssetCatalog:
        return self._catalog

    async def warm_up(self) -> WarmUpReport:
        """Populate the cache for all order and conditional-transfer chains.

        The first failing hash propagates. Entries stored before the failure
        stay valid; there is no rollback.
        """
        roots = order_chain_roots(self._catalog)
        collateral = self._catalog.collateral_asset_id
        entries_before = len(self._cache)
        calls_before = self._cache.stats().computations
        started = time.monotonic()

        logger.info("Warming hash cache for %d synthetic assets", len(roots))

        await asyncio.gather(
            # Orders: hash(hash(sell asset, buy asset), fee asset)
            asyncio.gather(*(self._warm_order_chain(asset_id, collateral) for _, asset_id in roots)),
            # Conditional transfers: hash(transfer asset, fee asset)
            self._cache.get_or_compute(*conditional_transfer_key(self._catalog)),
        )

        report = WarmUpReport(
            assets=[symbol for symbol, _ in roots],
            entries_before=entries_before,
            entries_after=len(self._cache),
            primitive_calls=self._cache.stats().computations - calls_before,
            elapsed_seconds=time.monotonic() - started,
        )
        logger.info(
            "Hash cache warm: %d new entries, %d primitive calls in %.2fs",
            report.entries_added,
            report.primitive_calls,
            report.elapsed_seconds,
        )
        return report

    async def _warm_order_chain(self, asset_id: int, collateral: int) -> None:
        buy_hash, sell_hash = await asyncio.gather(
            self._cache.get_or_compute(collateral, asset_id),
            self._cache.get_or_compute(asset_id, collateral),
        )
        # Results are only stored, not combined
        await asyncio.gather(
            self._cache.get_or_compute(buy_hash, collateral),
            self._cache.get_or_compute(sell_hash, collateral),
        )
