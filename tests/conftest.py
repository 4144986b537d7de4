import pytest

from sievecache import SieveCache
from sievecache.cache_store.arena import NIL


def check_invariants(cache):
    """Walk the cache internals and assert the structural invariants."""
    arena = cache._arena
    index = cache._index
    hand = cache.get_eviction_policy().hand

    assert 0 <= arena.size <= cache.capacity
    assert len(index) == arena.size

    if arena.size == 0:
        assert arena.head == NIL
        assert arena.tail == NIL

    seen = []
    prev = NIL
    slot = arena.head
    while slot != NIL:
        assert arena.prev_of(slot) == prev
        assert arena.in_use[slot]
        seen.append(slot)
        assert len(seen) <= arena.size, "list is longer than size (cycle?)"
        prev = slot
        slot = arena.next_of(slot)

    assert len(seen) == arena.size
    assert prev == arena.tail
    assert sorted(index.values()) == sorted(seen)
    for key, slot in index.items():
        assert arena.keys[slot] == key

    assert hand == NIL or hand in seen


@pytest.fixture
def assert_invariants():
    """Provides the structural invariant checker."""
    return check_invariants


@pytest.fixture
def cache4():
    """Provides an empty four-entry cache."""
    return SieveCache(capacity=4)


@pytest.fixture
def keys_in_order():
    """Provides a helper listing cache keys from newest to oldest."""
    def _keys(cache):
        arena = cache._arena
        return [arena.keys[slot] for slot in arena.iter_slots()]
    return _keys
