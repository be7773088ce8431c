"""YAML config loading and validation."""

from __future__ import annotations

from pathlib import Path

import yaml

from starkcache.types import AssetCatalog


def load_catalog_yaml(path: str | Path) -> AssetCatalog:
    """Load an asset catalog YAML file and return a validated AssetCatalog."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog YAML not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid catalog YAML in {path}: {e}") from e

    if not isinstance(raw, dict) or "catalog" not in raw:
        raise ValueError(f"Invalid catalog YAML: missing top-level 'catalog' key in {path}")
    if not isinstance(raw["catalog"], dict):
        raise ValueError(f"Invalid catalog YAML: 'catalog' must be a mapping in {path}")

    return AssetCatalog(**raw["catalog"])
