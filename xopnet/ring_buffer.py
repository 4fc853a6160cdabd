"""Fixed-capacity FIFO ring buffer."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """First-in first-out buffer holding at most ``capacity`` items."""

    DEFAULT_CAPACITY = 60

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._slots: list[T | None] = [None] * capacity
        self._put = 0
        self._get = 0
        self._count = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, item: T) -> bool:
        """Store ``item``; return False, storing nothing, when the buffer is full."""
        with self._lock:
            if self._count >= self._capacity:
                return False
            self._slots[self._put] = item
            self._put = (self._put + 1) % self._capacity
            self._count += 1
            return True

    def pop(self) -> T:
        """Remove and return the oldest item; raise IndexError when empty."""
        with self._lock:
            if self._count == 0:
                raise IndexError("pop from an empty ring buffer")
            item = self._slots[self._get]
            self._slots[self._get] = None
            self._get = (self._get + 1) % self._capacity
            self._count -= 1
            return item  # type: ignore[return-value]

    def is_full(self) -> bool:
        """True when no more items can be pushed."""
        return self._count == self._capacity

    def is_empty(self) -> bool:
        """True when there is nothing to pop."""
        return self._count == 0

    def __len__(self) -> int:
        return self._count