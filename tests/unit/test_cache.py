# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the single-flight request cache."""

from __future__ import annotations

import asyncio
import gc

import pytest

from invscan.datasource.cache import RequestCache


class TestRequestCacheGet:
    async def test_computes_once_and_remembers(self) -> None:
        cache: RequestCache[str, str] = RequestCache()
        calls = 0

        async def fetch() -> str:
            nonlocal calls
            calls += 1
            return "value"

        assert await cache.get("k", fetch) == "value"
        assert await cache.get("k", fetch) == "value"
        assert calls == 1
        assert len(cache) == 1

    async def test_concurrent_callers_share_one_computation(self) -> None:
        cache: RequestCache[str, int] = RequestCache()
        calls = 0
        release = asyncio.Event()

        async def slow() -> int:
            nonlocal calls
            calls += 1
            await release.wait()
            return 42

        waiters = [asyncio.create_task(cache.get("shared", slow)) for _ in range(50)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*waiters)

        assert calls == 1
        assert results == [42] * 50

    async def test_concurrent_callers_share_the_error(self) -> None:
        cache: RequestCache[str, int] = RequestCache()
        calls = 0
        release = asyncio.Event()

        async def broken() -> int:
            nonlocal calls
            calls += 1
            await release.wait()
            raise RuntimeError("registry down")

        waiters = [asyncio.create_task(cache.get("k", broken)) for _ in range(5)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*waiters, return_exceptions=True)

        assert calls == 1
        assert all(isinstance(r, RuntimeError) for r in results)
        assert {str(r) for r in results} == {"registry down"}

    async def test_failure_is_not_cached(self) -> None:
        cache: RequestCache[str, str] = RequestCache()
        attempts = 0

        async def flaky() -> str:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise RuntimeError("transient")
            return "ok"

        with pytest.raises(RuntimeError, match="transient"):
            await cache.get("k", flaky)
        assert await cache.get("k", flaky) == "ok"
        assert attempts == 2
        assert cache.get_map() == {"k": "ok"}

    async def test_keys_do_not_block_each_other(self) -> None:
        cache: RequestCache[str, str] = RequestCache()
        never = asyncio.Event()

        async def stuck() -> str:
            await never.wait()
            return "a"

        async def quick() -> str:
            return "b"

        blocked = asyncio.create_task(cache.get("a", stuck))
        await asyncio.sleep(0)
        assert await asyncio.wait_for(cache.get("b", quick), timeout=1) == "b"
        assert not blocked.done()
        never.set()
        assert await blocked == "a"

    async def test_cancelled_waiter_does_not_cancel_shared_computation(self) -> None:
        cache: RequestCache[str, str] = RequestCache()
        release = asyncio.Event()

        async def slow() -> str:
            await release.wait()
            return "done"

        first = asyncio.create_task(cache.get("k", slow))
        second = asyncio.create_task(cache.get("k", slow))
        await asyncio.sleep(0)
        first.cancel()
        release.set()

        assert await second == "done"
        with pytest.raises(asyncio.CancelledError):
            await first

    async def test_failure_after_every_waiter_cancelled_is_retrieved(self) -> None:
        loop = asyncio.get_running_loop()
        reported: list[dict] = []
        loop.set_exception_handler(lambda _loop, context: reported.append(context))
        cache: RequestCache[str, str] = RequestCache()
        release = asyncio.Event()

        async def failing() -> str:
            await release.wait()
            raise RuntimeError("registry unreachable")

        waiter = asyncio.create_task(cache.get("k", failing))
        await asyncio.sleep(0)
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        release.set()
        for _ in range(3):
            await asyncio.sleep(0)
        del waiter
        gc.collect()
        loop.set_exception_handler(None)

        assert not [c for c in reported if "never retrieved" in c.get("message", "")]
        assert len(cache) == 0


class TestRequestCacheMaps:
    async def test_seeded_entries_skip_fn(self) -> None:
        cache: RequestCache[str, str] = RequestCache()
        cache.set_map({"foo": "foo1"})

        async def miss() -> str:
            return "CACHE MISS"

        assert await cache.get("foo", miss) == "foo1"
        assert await cache.get("bar", miss) == "CACHE MISS"

    async def test_get_map_is_a_snapshot(self) -> None:
        cache: RequestCache[str, str] = RequestCache()
        cache.set_map({"a": "1"})
        snapshot = cache.get_map()
        snapshot["b"] = "2"
        assert cache.get_map() == {"a": "1"}

    async def test_get_map_excludes_inflight(self) -> None:
        cache: RequestCache[str, str] = RequestCache()
        release = asyncio.Event()

        async def slow() -> str:
            await release.wait()
            return "v"

        task = asyncio.create_task(cache.get("pending", slow))
        await asyncio.sleep(0)
        assert cache.get_map() == {}
        release.set()
        await task
        assert cache.get_map() == {"pending": "v"}

    def test_set_map_merges(self) -> None:
        cache: RequestCache[str, int] = RequestCache()
        cache.set_map({"a": 1, "b": 2})
        cache.set_map({"b": 3, "c": 4})
        assert cache.get_map() == {"a": 1, "b": 3, "c": 4}
