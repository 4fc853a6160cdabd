import pytest

from xopnet.memory_manager import (
    MemoryBlock,
    MemoryManager,
    MemoryPool,
    alloc,
    free,
)


def test_small_alloc_comes_from_first_pool():
    manager = MemoryManager()
    block = manager.alloc(100)
    assert block.pool is manager.pools[0]
    assert len(block.data) == 4096
    assert block.block_id > 0


def test_pool_exhaustion_falls_back():
    manager = MemoryManager(pool_specs=((16, 2),))
    blocks = [manager.alloc(8) for _ in range(3)]
    assert [b.block_id > 0 for b in blocks] == [True, True, False]
    assert blocks[2].pool is None
    assert len(blocks[2].data) == 8


def test_exhausted_pool_does_not_try_larger_pool():
    manager = MemoryManager(pool_specs=((16, 1), (64, 2)))
    manager.alloc(8)
    block = manager.alloc(8)
    assert block.pool is None
    assert manager.pools[1].available() == 2


def test_large_alloc_is_direct():
    manager = MemoryManager(pool_specs=((16, 1),))
    block = manager.alloc(1000)
    assert block.block_id == 0
    assert len(block.data) == 1000


def test_free_returns_block_to_pool():
    manager = MemoryManager(pool_specs=((32, 2),))
    pool = manager.pools[0]
    first = manager.alloc(10)
    assert pool.available() == 1
    manager.free(first)
    assert pool.available() == 2
    assert manager.alloc(10) is first


def test_pool_errors():
    pool = MemoryPool(8, 1)
    with pytest.raises(ValueError):
        pool.alloc(9)
    block = pool.alloc(4)
    with pytest.raises(MemoryError):
        pool.alloc(4)
    pool.free(block)
    with pytest.raises(ValueError):
        pool.free(block)
    with pytest.raises(ValueError):
        MemoryPool(8, 1).free(block)


def test_free_of_direct_block_is_ignored():
    manager = MemoryManager(pool_specs=((16, 1),))
    manager.free(MemoryBlock(bytearray(4)))
    assert manager.pools[0].available() == 1


def test_shared_manager_functions():
    manager = MemoryManager.instance()
    assert MemoryManager.instance() is manager
    pool = manager.pools[0]
    before = pool.available()
    block = alloc(64)
    assert pool.available() == before - 1
    free(block)
    assert pool.available() == before


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        MemoryManager(pool_specs=((16, 1),)).alloc(-1)