"""
Per-key single-flight cache.

Concurrent requests for the same missing key share one construction;
requests for different keys never wait on each other.
"""
import asyncio
from typing import Awaitable, Callable, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _consume_result(task: "asyncio.Task") -> None:
    # Waiters may all have gone away; don't leave the exception unretrieved.
    if not task.cancelled():
        task.exception()


class SingleFlightCache(Generic[K, V]):
    """Process-scoped key/value store with coalesced async construction."""

    def __init__(self) -> None:
        self._values: dict[K, V] = {}
        self._inflight: dict[K, asyncio.Task] = {}
        self._generation = 0

    async def get_or_create(self, key: K, factory: Callable[[], Awaitable[V]]) -> V:
        """
        Return the value for ``key``, building it with ``factory`` if needed.

        The first caller for a missing key starts ``factory`` as a task; any
        caller arriving while it runs awaits the same task. Each caller awaits
        through ``asyncio.shield`` so cancelling one waiter does not cancel the
        construction. A failed construction is raised to every waiter and
        nothing is cached, so the next call starts over.
        """
        if key in self._values:
            return self._values[key]

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._build(key, factory, self._generation))
            task.add_done_callback(_consume_result)
            self._inflight[key] = task
        return await asyncio.shield(task)

    async def _build(
        self, key: K, factory: Callable[[], Awaitable[V]], generation: int
    ) -> V:
        try:
            value = await factory()
            # A clear() during construction means the value is stale.
            if generation == self._generation:
                self._values[key] = value
            return value
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]

    def get(self, key: K) -> Optional[V]:
        """Return the cached value without building it."""
        return self._values.get(key)

    def pending(self, key: K) -> bool:
        """True while a construction for ``key`` is in flight."""
        return key in self._inflight

    def keys(self) -> list[K]:
        return list(self._values)

    def values(self) -> list[V]:
        return list(self._values.values())

    def clear(self) -> None:
        """
        Forget every cached value.

        In-flight constructions still finish for their current waiters, but
        their results are not cached and later callers start a fresh build.
        """
        self._generation += 1
        self._values.clear()
        self._inflight.clear()

    @property
    def generation(self) -> int:
        """Counter bumped by every clear()."""
        return self._generation

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
