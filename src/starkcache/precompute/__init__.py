"""Precompute: warm the hash cache with the chains signing needs."""

from starkcache.precompute.chains import (
    conditional_transfer_key,
    expected_key_count,
    order_chain_roots,
)
from starkcache.precompute.warmup import Precomputer

__all__ = [
    "Precomputer",
    "conditional_transfer_key",
    "expected_key_count",
    "order_chain_roots",
]
