"""Shared Pydantic models for starkcache."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from starkcache.errors.exceptions import CatalogError, InvalidOperandError
from starkcache.utils.numbers import parse_operand

# Fee asset used by conditional transfers when the catalog does not name one.
DEFAULT_CONDITIONAL_TRANSFER_FEE_ASSET_ID = 0


# ── Catalog models ──


class AssetCatalog(BaseModel):
    """Asset identifiers needed to enumerate the precomputed hash chains.

    Ids may be given as ints or as ``0x``-prefixed hex / decimal strings.
    """

    collateral_asset_id: int
    assets: dict[str, int] = Field(default_factory=dict)
    synthetic_assets: list[str] = Field(default_factory=list)
    conditional_transfer_fee_asset_id: int = DEFAULT_CONDITIONAL_TRANSFER_FEE_ASSET_ID

    @field_validator("collateral_asset_id", "conditional_transfer_fee_asset_id", mode="before")
    @classmethod
    def _parse_id(cls, value: Any) -> int:
        return _to_operand(value)

    @field_validator("assets", mode="before")
    @classmethod
    def _parse_asset_ids(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(symbol): _to_operand(asset_id) for symbol, asset_id in value.items()}

    @model_validator(mode="after")
    def _check_synthetics_known(self) -> AssetCatalog:
        missing = [s for s in self.synthetic_assets if s not in self.assets]
        if missing:
            raise ValueError(f"Synthetic assets missing from asset map: {', '.join(missing)}")
        return self

    def asset_id(self, symbol: str) -> int:
        try:
            return self.assets[symbol]
        except KeyError:
            raise CatalogError(f"Unknown asset symbol: {symbol}", symbol=symbol) from None


# ── Runtime models ──


class WarmUpReport(BaseModel):
    assets: list[str] = Field(default_factory=list)
    entries_before: int = 0
    entries_after: int = 0
    primitive_calls: int = 0
    elapsed_seconds: float = 0.0

    @property
    def entries_added(self) -> int:
        return self.entries_after - self.entries_before


def _to_operand(value: Any) -> int:
    # Surface as ValueError so pydantic reports it as a ValidationError
    try:
        return parse_operand(value)
    except InvalidOperandError as e:
        raise ValueError(e.message) from e
