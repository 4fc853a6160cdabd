"""Thread-safe FIFO queues for producer/consumer hand-off."""

from __future__ import annotations

import queue
import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class QueueTerminated(Exception):
    """Raised when a terminated queue has no items left to pop."""


class TerminableQueue(Generic[T]):
    """Queue that can be switched into a terminated state.

    Once terminated, pushes are ignored, remaining items can still be popped,
    and :meth:`wait_and_pop` no longer blocks.
    """

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._terminated = False

    def push(self, item: T) -> None:
        """Append ``item`` unless the queue has been terminated."""
        with self._cond:
            if self._terminated:
                return
            self._items.append(item)
            self._cond.notify()

    def wait_and_pop(self, timeout: float | None = None) -> T:
        """Block until an item is available and return it.

        Raises :class:`QueueTerminated` when the queue is terminated and
        empty, and :class:`queue.Empty` when ``timeout`` seconds pass first.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: bool(self._items) or self._terminated, timeout
            )
            if not ready:
                raise queue.Empty
            if self._items:
                return self._items.popleft()
            raise QueueTerminated("queue is terminated and empty")

    def try_pop(self) -> T:
        """Return the next item without blocking; raise queue.Empty if none."""
        with self._cond:
            if not self._items:
                raise queue.Empty
            return self._items.popleft()

    def empty(self) -> bool:
        with self._cond:
            return not self._items

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def terminate(self) -> None:
        """Enter the terminated state and release every waiting consumer."""
        with self._cond:
            self._terminated = True
            self._cond.notify_all()

    def is_terminated(self) -> bool:
        return self._terminated


class ThreadSafeQueue(Generic[T]):
    """Lock-protected FIFO whose waiting consumers can be woken explicitly."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._wakeups = 0

    def push(self, item: T) -> None:
        with self._cond:
            self._items.append(item)
            self._cond.notify()

    def wait_and_pop(self, timeout: float | None = None) -> T:
        """Wait for an item and return it.

        Raises :class:`queue.Empty` when woken by :meth:`wake` with nothing
        queued, or when ``timeout`` seconds pass.
        """
        with self._cond:
            seen = self._wakeups
            ready = self._cond.wait_for(
                lambda: bool(self._items) or self._wakeups != seen, timeout
            )
            if not ready or not self._items:
                raise queue.Empty
            return self._items.popleft()

    def try_pop(self) -> T:
        """Return the next item without blocking; raise queue.Empty if none."""
        with self._cond:
            if not self._items:
                raise queue.Empty
            return self._items.popleft()

    def empty(self) -> bool:
        with self._cond:
            return not self._items

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def clear(self) -> None:
        """Drop every queued item."""
        with self._cond:
            self._items.clear()

    def wake(self) -> None:
        """Release one waiting consumer even if nothing is queued."""
        with self._cond:
            self._wakeups += 1
            self._cond.notify()