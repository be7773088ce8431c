"""Top-level entry point: StarkCache owns one hash cache and its precomputer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from starkcache.cache.memory import HashCache, HashPrimitive
from starkcache.cache.stats import CacheStats
from starkcache.config.loader import load_catalog_yaml
from starkcache.errors.exceptions import ConfigurationError
from starkcache.precompute.warmup import Precomputer
from starkcache.primitive import resolve_primitive
from starkcache.types import AssetCatalog, WarmUpReport

logger = logging.getLogger(__name__)


class StarkCache:
    """Memoized Pedersen hashing with explicit lifecycle.

    Construct once per process and hand the instance to every signing routine
    that needs a hash; nothing here is module-global.
    """

    def __init__(
        self,
        primitive: HashPrimitive,
        catalog: AssetCatalog | None = None,
        max_concurrency: int | None = None,
        collapse_in_flight: bool = True,
    ) -> None:
        self._cache = HashCache(
            primitive,
            max_concurrency=max_concurrency,
            collapse_in_flight=collapse_in_flight,
        )
        self._catalog = catalog
        self._precomputer = Precomputer(self._cache, catalog) if catalog else None

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> StarkCache:
        """Build from a merged config dict (see ``load_config_hierarchy``)."""
        primitive = resolve_primitive(config.get("hash_function"))
        catalog_path = config.get("catalog_path")
        catalog = load_catalog_yaml(Path(catalog_path)) if catalog_path else None
        return cls(
            primitive,
            catalog=catalog,
            max_concurrency=config.get("max_concurrency"),
            collapse_in_flight=not config.get("collapse_disabled", False),
        )

    @property
    def cache(self) -> HashCache:
        return self._cache

    @property
    def catalog(self) -> AssetCatalog | None:
        return self._catalog

    async def get_or_compute(self, left: int, right: int) -> int:
        return await self._cache.get_or_compute(left, right)

    async def warm_up(self) -> WarmUpReport:
        if self._precomputer is None:
            raise ConfigurationError("No asset catalog configured", key="catalog_path")
        return await self._precomputer.warm_up()

    def stats(self) -> CacheStats:
        return self._cache.stats()
