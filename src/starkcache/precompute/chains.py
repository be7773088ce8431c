"""Hash chain enumeration for orders and conditional transfers."""

from __future__ import annotations

from starkcache.types import AssetCatalog


def order_chain_roots(catalog: AssetCatalog) -> list[tuple[str, int]]:
    """Return ``(symbol, asset_id)`` for every synthetic asset, in catalog order.

    Each root expands to the order chain
    ``hash(hash(C, A), C)`` and ``hash(hash(A, C), C)`` with ``C`` the collateral.
    """
    return [(symbol, catalog.asset_id(symbol)) for symbol in catalog.synthetic_assets]


def conditional_transfer_key(catalog: AssetCatalog) -> tuple[int, int]:
    """Conditional transfers hash (transfer asset, fee asset)."""
    return catalog.collateral_asset_id, catalog.conditional_transfer_fee_asset_id


def expected_key_count(catalog: AssetCatalog) -> int:
    """Upper bound on distinct cache keys a warm-up can add.

    Four per synthetic asset plus the conditional-transfer key; fewer when
    operands or intermediate digests coincide.
    """
    return 4 * len(set(catalog.synthetic_assets)) + 1
