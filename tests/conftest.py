import asyncio

import pytest


class CountingPrimitive:
    """Stub hash primitive: ``x * 1000 + y`` by default, records every call."""

    def __init__(self, fn=None, fail_on=(), delay=0.0, delays=None):
        self.fn = fn or (lambda x, y: x * 1000 + y)
        self.fail_on = set(fail_on)
        self.delay = delay
        self.delays = delays or {}
        self.calls = []
        self.events = []

    async def __call__(self, left, right):
        self.calls.append((left, right))
        self.events.append(("start", left, right))
        await asyncio.sleep(self.delays.get((left, right), self.delay))
        if (left, right) in self.fail_on:
            raise RuntimeError(f"boom for ({left}, {right})")
        self.events.append(("done", left, right))
        return self.fn(left, right)

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture
def primitive():
    return CountingPrimitive()


@pytest.fixture
def make_primitive():
    return CountingPrimitive


@pytest.fixture
def sample_catalog():
    from starkcache.types import AssetCatalog

    return AssetCatalog(
        collateral_asset_id=0x1,
        assets={"A1": 0x2, "A2": 0x3},
        synthetic_assets=["A1", "A2"],
        conditional_transfer_fee_asset_id=0x5,
    )


@pytest.fixture
def sample_catalog_yaml(tmp_path):
    """Write a minimal catalog YAML and return its path."""
    content = """
catalog:
  collateral_asset_id: "0x1"
  conditional_transfer_fee_asset_id: "0x5"
  assets:
    A1: "0x2"
    A2: "0x3"
  synthetic_assets: [A1, A2]
"""
    path = tmp_path / "catalog.yaml"
    path.write_text(content)
    return path
