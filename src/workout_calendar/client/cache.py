"""Response cache keyed by logical resource path."""

import asyncio
from typing import Any, Awaitable, Callable

Key = tuple[str, ...]


class QueryCache:
    """Caches query results until a mutation invalidates them.

    Keys are tuples of path segments, e.g. ``("workouts", id, "exercises")``.
    Invalidating a prefix drops every key that starts with it, so
    ``("workouts",)`` clears all workout-related queries at once.
    """

    def __init__(self):
        self._entries: dict[Key, Any] = {}
        self._inflight: dict[Key, asyncio.Task] = {}
        self._generation = 0

    def __contains__(self, key: Key) -> bool:
        return key in self._entries

    def keys(self) -> list[Key]:
        return list(self._entries)

    def get(self, key: Key, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: Key, value: Any) -> None:
        self._entries[key] = value

    async def fetch(self, key: Key, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for ``key``, loading it on a miss.

        Concurrent fetches of the same key share one load. An invalidation
        detaches loads already in flight: they are returned to whoever was
        waiting on them but never stored, and later fetches start afresh.
        """
        if key in self._entries:
            return self._entries[key]

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(loader())
            self._inflight[key] = task
            generation = self._generation
            try:
                value = await task
            finally:
                if self._inflight.get(key) is task:
                    del self._inflight[key]
            if generation == self._generation:
                self._entries[key] = value
            return value

        return await task

    def invalidate(self, prefix: Key) -> int:
        """Drop every entry and in-flight load whose key starts with ``prefix``."""
        self._generation += 1
        for key in [key for key in self._inflight if key[: len(prefix)] == prefix]:
            del self._inflight[key]
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._generation += 1
        self._inflight.clear()
        self._entries.clear()
