"""Tests for the in-memory hash cache."""

import asyncio

import pytest

from starkcache.cache.memory import HashCache
from starkcache.errors.exceptions import (
    ConfigurationError,
    InvalidOperandError,
    PrimitiveComputationError,
)


class TestGetOrCompute:
    async def test_example_pair(self, primitive):
        cache = HashCache(primitive)
        assert await cache.get_or_compute(0x1, 0x2) == 1002
        assert await cache.get_or_compute(0x1, 0x2) == 1002
        assert primitive.call_count == 1

    async def test_idempotent_no_second_call(self, primitive):
        cache = HashCache(primitive)
        first = await cache.get_or_compute(7, 9)
        second = await cache.get_or_compute(7, 9)
        assert first == second
        assert primitive.calls == [(7, 9)]

    async def test_order_sensitive(self, primitive):
        cache = HashCache(primitive)
        ab = await cache.get_or_compute(2, 3)
        ba = await cache.get_or_compute(3, 2)
        assert ab == 2003
        assert ba == 3002
        assert len(cache) == 2
        assert primitive.call_count == 2

    async def test_zero_operands(self, primitive):
        cache = HashCache(primitive)
        assert await cache.get_or_compute(0, 0) == 0
        assert cache.contains(0, 0)

    async def test_large_operands(self, make_primitive):
        big = 2**251 + 17
        prim = make_primitive(fn=lambda x, y: (x + y) % (2**251))
        cache = HashCache(prim)
        assert await cache.get_or_compute(big, 1) == 18
        assert cache.peek(big, 1) == 18

    async def test_sync_primitive_accepted(self):
        cache = HashCache(lambda x, y: x + y)
        assert await cache.get_or_compute(4, 5) == 9


class TestConcurrency:
    async def test_concurrent_callers_collapse(self, make_primitive):
        prim = make_primitive(delay=0.01)
        cache = HashCache(prim)
        results = await asyncio.gather(*(cache.get_or_compute(1, 2) for _ in range(10)))
        assert results == [1002] * 10
        assert len(cache) == 1
        assert prim.call_count == 1
        assert cache.stats().collapsed == 9
        assert cache.in_flight == 0

    async def test_concurrent_callers_without_collapse(self, make_primitive):
        prim = make_primitive(delay=0.01)
        cache = HashCache(prim, collapse_in_flight=False)
        results = await asyncio.gather(*(cache.get_or_compute(1, 2) for _ in range(10)))
        assert results == [1002] * 10
        assert len(cache) == 1
        assert prim.call_count == 10

    async def test_max_concurrency_bound(self):
        concurrent = 0
        max_concurrent = 0

        async def slow_primitive(left, right):
            nonlocal concurrent, max_concurrent
            concurrent += 1
            max_concurrent = max(max_concurrent, concurrent)
            await asyncio.sleep(0.01)
            concurrent -= 1
            return left + right

        cache = HashCache(slow_primitive, max_concurrency=2)
        await asyncio.gather(*(cache.get_or_compute(i, 0) for i in range(6)))
        assert max_concurrent <= 2
        assert len(cache) == 6

    @pytest.mark.parametrize("bad", [0, -1, True, "4", 2.5])
    def test_invalid_max_concurrency(self, primitive, bad):
        with pytest.raises(ConfigurationError) as exc_info:
            HashCache(primitive, max_concurrency=bad)
        assert exc_info.value.key == "max_concurrency"

    async def test_cancelled_waiter_does_not_cancel_shared_computation(self, make_primitive):
        prim = make_primitive(delay=0.05)
        cache = HashCache(prim)
        waiter = asyncio.ensure_future(cache.get_or_compute(1, 2))
        await asyncio.sleep(0)
        other = asyncio.ensure_future(cache.get_or_compute(1, 2))
        await asyncio.sleep(0)
        waiter.cancel()
        assert await other == 1002
        assert cache.peek(1, 2) == 1002


class TestFailures:
    async def test_primitive_failure_propagates(self, make_primitive):
        prim = make_primitive(fail_on={(1, 2)})
        cache = HashCache(prim)
        with pytest.raises(PrimitiveComputationError) as exc_info:
            await cache.get_or_compute(1, 2)
        err = exc_info.value
        assert err.left == 1
        assert err.right == 2
        assert isinstance(err.original, RuntimeError)
        assert isinstance(err.__cause__, RuntimeError)

    async def test_failure_leaves_key_unpopulated(self, make_primitive):
        prim = make_primitive(fail_on={(1, 2)})
        cache = HashCache(prim)
        with pytest.raises(PrimitiveComputationError):
            await cache.get_or_compute(1, 2)
        assert not cache.contains(1, 2)
        assert len(cache) == 0
        assert cache.in_flight == 0
        assert cache.stats().failures == 1

    async def test_retry_after_failure_calls_primitive_again(self, make_primitive):
        prim = make_primitive(fail_on={(1, 2)})
        cache = HashCache(prim)
        with pytest.raises(PrimitiveComputationError):
            await cache.get_or_compute(1, 2)
        prim.fail_on.clear()
        assert await cache.get_or_compute(1, 2) == 1002
        assert prim.call_count == 2

    async def test_concurrent_waiters_all_see_failure(self, make_primitive):
        prim = make_primitive(fail_on={(1, 2)}, delay=0.01)
        cache = HashCache(prim)
        results = await asyncio.gather(
            *(cache.get_or_compute(1, 2) for _ in range(3)), return_exceptions=True
        )
        assert all(isinstance(r, PrimitiveComputationError) for r in results)
        assert prim.call_count == 1

    async def test_invalid_digest_rejected(self):
        cache = HashCache(lambda x, y: -1)
        with pytest.raises(PrimitiveComputationError, match="invalid digest"):
            await cache.get_or_compute(1, 2)
        assert len(cache) == 0

    @pytest.mark.parametrize("bad", [-1, 1.5, "0x1", None, True])
    async def test_invalid_operand_fails_fast(self, primitive, bad):
        cache = HashCache(primitive)
        with pytest.raises(InvalidOperandError):
            await cache.get_or_compute(bad, 1)
        with pytest.raises(InvalidOperandError):
            await cache.get_or_compute(1, bad)
        assert primitive.call_count == 0


class TestInspection:
    async def test_peek_miss(self, primitive):
        cache = HashCache(primitive)
        assert cache.peek(1, 2) is None
        assert primitive.call_count == 0

    async def test_keys(self, primitive):
        cache = HashCache(primitive)
        await cache.get_or_compute(0x10, 0x2)
        await cache.get_or_compute(0x10, 0x3)
        await cache.get_or_compute(0x3, 0x10)
        assert sorted(cache.keys()) == [("10", "2"), ("10", "3"), ("3", "10")]

    async def test_len(self, primitive):
        cache = HashCache(primitive)
        assert len(cache) == 0
        await cache.get_or_compute(1, 2)
        assert len(cache) == 1
        await cache.get_or_compute(1, 3)
        assert len(cache) == 2

    async def test_stats_hits_and_misses(self, primitive):
        cache = HashCache(primitive)
        await cache.get_or_compute(1, 2)  # miss
        await cache.get_or_compute(1, 2)  # hit
        await cache.get_or_compute(1, 2)  # hit
        stats = cache.stats()
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.computations == 1
        assert stats.entries == 1
        assert stats.hit_rate == pytest.approx(2 / 3)

    async def test_fresh_instances_are_isolated(self, primitive):
        first = HashCache(primitive)
        await first.get_or_compute(1, 2)
        second = HashCache(primitive)
        assert len(second) == 0
        assert second.peek(1, 2) is None
