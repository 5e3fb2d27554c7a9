# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Per-key single-flight cache for idempotent lookups.

Registry clients wrap their network requests in :class:`RequestCache` so
that concurrent lookups of the same key share one request and later
lookups are answered from memory.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable, Mapping
from typing import Generic, TypeVar

logger = logging.getLogger("invscan.datasource.cache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _retrieve_exception(task: asyncio.Task) -> None:
    # Every waiter may have been cancelled before the lookup failed.
    if not task.cancelled():
        task.exception()


class RequestCache(Generic[K, V]):
    """Memoises ``fn()`` per key with at most one computation in flight.

    * A resolved key is answered without calling ``fn``.
    * Concurrent callers for an unresolved key all await the same
      computation and all see its value, or its exception.
    * Failures are not remembered: the next ``get`` calls ``fn`` again.
    * Computations are shielded, so a cancelled caller does not cancel
      the lookup other callers are waiting on.
    """

    def __init__(self) -> None:
        self._results: dict[K, V] = {}
        self._inflight: dict[K, asyncio.Task[V]] = {}

    async def get(self, key: K, fn: Callable[[], Awaitable[V]]) -> V:
        if key in self._results:
            logger.debug("Cache HIT for %r", key)
            return self._results[key]
        task = self._inflight.get(key)
        if task is None:
            logger.debug("Cache MISS for %r", key)
            task = asyncio.ensure_future(self._fetch(key, fn))
            task.add_done_callback(_retrieve_exception)
            self._inflight[key] = task
        return await asyncio.shield(task)

    async def _fetch(self, key: K, fn: Callable[[], Awaitable[V]]) -> V:
        try:
            value = await fn()
        except BaseException:
            self._inflight.pop(key, None)
            raise
        self._results[key] = value
        self._inflight.pop(key, None)
        return value

    def set_map(self, entries: Mapping[K, V]) -> None:
        """Seed resolved entries; ``get`` never calls ``fn`` for these keys."""
        self._results.update(entries)

    def get_map(self) -> dict[K, V]:
        """Snapshot of every resolved entry. In-flight keys are not included."""
        return dict(self._results)

    def __len__(self) -> int:
        return len(self._results)
