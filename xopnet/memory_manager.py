"""Fixed-size block pools with a fallback to plain allocation."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field

DEFAULT_POOLS = ((4096, 50), (40960, 10), (102400, 5))


@dataclass(eq=False)
class MemoryBlock:
    """A buffer handed out by a pool (``block_id`` > 0) or allocated directly."""

    data: bytearray
    block_id: int = 0
    pool: MemoryPool | None = field(default=None, repr=False)


class MemoryPool:
    """A fixed number of equally sized blocks reused last-freed first."""

    def __init__(self, block_size: int, count: int) -> None:
        if block_size <= 0 or count <= 0:
            raise ValueError("block_size and count must be positive")
        self.block_size = block_size
        self.count = count
        self._lock = threading.Lock()
        self._free: deque[MemoryBlock] = deque(
            MemoryBlock(bytearray(block_size), block_id, self)
            for block_id in range(1, count + 1)
        )

    def alloc(self, size: int) -> MemoryBlock:
        """Take a free block; raise MemoryError when the pool is exhausted."""
        if size > self.block_size:
            raise ValueError(f"size {size} exceeds block size {self.block_size}")
        with self._lock:
            if not self._free:
                raise MemoryError("memory pool exhausted")
            return self._free.popleft()

    def free(self, block: MemoryBlock) -> None:
        """Return ``block`` to this pool."""
        if block.pool is not self:
            raise ValueError("block does not belong to this pool")
        if block.block_id == 0:
            return
        with self._lock:
            if any(existing is block for existing in self._free):
                raise ValueError("block is already free")
            self._free.appendleft(block)

    def available(self) -> int:
        """Number of blocks ready to be handed out."""
        with self._lock:
            return len(self._free)


class MemoryManager:
    """Serves allocations from the smallest fitting pool, else directly."""

    _instance: MemoryManager | None = None
    _instance_lock = threading.Lock()

    def __init__(self, pool_specs=DEFAULT_POOLS) -> None:
        self.pools = tuple(MemoryPool(size, count) for size, count in pool_specs)

    @classmethod
    def instance(cls) -> "MemoryManager":
        """Return the shared manager, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def alloc(self, size: int) -> MemoryBlock:
        """Allocate at least ``size`` bytes.

        Only the first pool large enough is tried; if it is exhausted the
        block is allocated directly.
        """
        if size < 0:
            raise ValueError("size must not be negative")
        for pool in self.pools:
            if size <= pool.block_size:
                try:
                    return pool.alloc(size)
                except MemoryError:
                    break
        return MemoryBlock(bytearray(size))

    def free(self, block: MemoryBlock) -> None:
        """Give ``block`` back to its pool; directly allocated blocks are dropped."""
        if block.pool is not None and block.block_id > 0:
            block.pool.free(block)


def alloc(size: int) -> MemoryBlock:
    """Allocate through the shared manager."""
    return MemoryManager.instance().alloc(size)


def free(block: MemoryBlock) -> None:
    """Release through the shared manager."""
    MemoryManager.instance().free(block)