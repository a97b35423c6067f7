"""Capacity-limited containers that count what they drop."""

from __future__ import annotations

from collections import OrderedDict, deque
from collections.abc import Hashable, Iterator
from typing import Any


class EvictedQueue:
    """FIFO queue that drops its oldest entry when full."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self.dropped_count = 0
        self._queue: deque[Any] = deque(maxlen=max(capacity, 0))

    def add(self, value: Any) -> None:
        if len(self._queue) >= self.capacity:
            self.dropped_count += 1
        self._queue.append(value)

    def items(self) -> list[Any]:
        """Return the queued values, oldest first."""
        return list(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._queue)


class LruMap:
    """Mapping that evicts its least recently added key when full."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self.dropped_count = 0
        self._map: OrderedDict[Hashable, Any] = OrderedDict()

    def add(self, key: Hashable, value: Any) -> None:
        if key in self._map:
            self._map.move_to_end(key)
            self._map[key] = value
            return
        self._map[key] = value
        if len(self._map) > self.size:
            self._map.popitem(last=False)
            self.dropped_count += 1

    def items(self) -> list[tuple[Hashable, Any]]:
        """Return (key, value) pairs, oldest first."""
        return list(self._map.items())

    def __len__(self) -> int:
        return len(self._map)