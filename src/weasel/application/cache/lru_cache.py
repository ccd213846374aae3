"""Bounded, time-aware LRU cache."""

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass
class _CacheSlot[V]:
    """Cached value plus the time it was last used."""

    value: V
    last_used: float


class TimedLruCache[K, V]:
    """Dictionary holding at most `capacity` mappings.

    The least recently used mappings are purged once capacity is exceeded. With
    max_age_seconds > 0, mappings not used for longer than that are purged as well.
    Reading a mapping counts as using it.

    Not safe for concurrent use from several threads; single event loop use is fine
    since no method awaits.
    """

    # Hey future me, the OrderedDict IS the recency list: first item = least recently used,
    # last item = most recently used. Since a slot moves to the end every time it's touched,
    # the stale ones always pile up at the front and cleanup only has to look there.
    def __init__(
        self,
        capacity: int = 10,
        max_age_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if max_age_seconds < 0:
            raise ValueError("max_age_seconds must not be negative")
        self.capacity = capacity
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._slots: OrderedDict[K, _CacheSlot[V]] = OrderedDict()

    def __setitem__(self, key: K, value: V) -> None:
        self._slots[key] = _CacheSlot(value=value, last_used=self._clock())
        self._slots.move_to_end(key)
        self._cleanup()

    def __getitem__(self, key: K) -> V:
        self._cleanup()
        slot = self._slots[key]
        slot.last_used = self._clock()
        self._slots.move_to_end(key)
        return slot.value

    def __contains__(self, key: object) -> bool:
        self._cleanup()
        return key in self._slots

    def __len__(self) -> int:
        self._cleanup()
        return len(self._slots)

    def contains(self, key: K) -> bool:
        """Whether a non-expired mapping exists. Does not count as a use."""
        return key in self

    def get(self, key: K, default: V | None = None) -> V | None:
        """Get value (marking it used) or default if missing/expired."""
        try:
            return self[key]
        except KeyError:
            return default

    def pop(self, key: K, default: V | None = None) -> V | None:
        """Remove a mapping and return its value (default if missing/expired)."""
        self._cleanup()
        slot = self._slots.pop(key, None)
        return default if slot is None else slot.value

    def clear(self) -> None:
        self._slots.clear()

    def _cleanup(self) -> None:
        while len(self._slots) > self.capacity:
            self._slots.popitem(last=False)

        if self.max_age_seconds == 0:
            return

        now = self._clock()
        while self._slots:
            oldest = next(iter(self._slots.values()))
            if now - oldest.last_used <= self.max_age_seconds:
                break
            self._slots.popitem(last=False)

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics (after purging stale mappings)."""
        return {
            "entries": len(self),
            "capacity": self.capacity,
            "max_age_seconds": self.max_age_seconds,
        }


__all__ = ["TimedLruCache"]
