import pytest

from sievecache.cache_store.arena import NIL, EntryArena
from sievecache.exceptions import CacheOperationError


@pytest.fixture
def arena():
    """Provides an empty three-slot arena."""
    return EntryArena(3)


def _fill(arena, *keys):
    slots = []
    for key in keys:
        slot = arena.allocate(key, f"v{key}")
        arena.push_front(slot)
        slots.append(slot)
    return slots


def test_new_arena_is_empty(arena):
    assert arena.size == 0
    assert arena.head == NIL
    assert arena.tail == NIL
    assert arena.free_slots == 3
    assert list(arena.iter_slots()) == []


def test_push_front_orders_newest_first(arena):
    """Test that the head is the newest entry and the tail the oldest."""
    a, b, c = _fill(arena, "a", "b", "c")

    assert list(arena.iter_slots()) == [c, b, a]
    assert arena.head == c
    assert arena.tail == a
    assert arena.prev_of(c) == NIL
    assert arena.next_of(a) == NIL
    assert arena.prev_of(a) == b
    assert arena.next_of(c) == b
    assert arena.size == 3
    assert arena.free_slots == 0


def test_allocate_from_exhausted_arena_raises(arena):
    """Test that allocation never silently overwrites a live slot."""
    _fill(arena, "a", "b", "c")
    with pytest.raises(CacheOperationError, match="exhausted"):
        arena.allocate("d", "vd")


@pytest.mark.parametrize("victim", [0, 1, 2])
def test_unlink_keeps_list_consistent(arena, victim):
    """Test unlinking the tail, a middle slot and the head."""
    slots = _fill(arena, "a", "b", "c")
    removed = slots[victim]

    arena.unlink(removed)

    remaining = [s for s in reversed(slots) if s != removed]
    assert list(arena.iter_slots()) == remaining
    assert arena.head == remaining[0]
    assert arena.tail == remaining[-1]
    assert arena.prev_of(arena.head) == NIL
    assert arena.next_of(arena.tail) == NIL
    assert arena.size == 2


def test_unlink_last_slot_empties_list(arena):
    (only,) = _fill(arena, "a")
    arena.unlink(only)
    assert arena.head == NIL
    assert arena.tail == NIL
    assert arena.size == 0


def test_released_slot_is_reused(arena):
    """Test that the free list hands a released slot out again."""
    a, b, c = _fill(arena, "a", "b", "c")
    arena.unlink(b)
    arena.release(b)

    assert arena.keys[b] is None
    assert arena.values[b] is None
    assert arena.free_slots == 1

    slot = arena.allocate("d", "vd")
    assert slot == b
    assert arena.keys[slot] == "d"
    assert not arena.is_visited(slot)


def test_double_release_raises(arena):
    (a,) = _fill(arena, "a")
    arena.unlink(a)
    arena.release(a)
    with pytest.raises(CacheOperationError, match="already free"):
        arena.release(a)


def test_visited_bit(arena):
    (a,) = _fill(arena, "a")
    assert arena.is_visited(a) is False
    arena.mark_visited(a)
    assert arena.is_visited(a) is True
    arena.clear_visited(a)
    assert arena.is_visited(a) is False


def test_clear_resets_everything(arena):
    """Test that clear frees every slot and drops stored objects."""
    slots = _fill(arena, "a", "b", "c")
    for slot in slots:
        arena.mark_visited(slot)

    arena.clear()

    assert arena.size == 0
    assert arena.head == NIL
    assert arena.tail == NIL
    assert arena.free_slots == 3
    assert arena.keys == [None, None, None]
    assert not arena.visited.any()
    assert sorted(_fill(arena, "x", "y", "z")) == [0, 1, 2]


def test_slot_numbers_are_python_ints(arena):
    """Test that links come back as plain ints, usable as dict values."""
    a, b = _fill(arena, "a", "b")
    assert type(a) is int
    assert type(arena.prev_of(a)) is int
    assert type(arena.next_of(b)) is int
    assert all(type(s) is int for s in arena.iter_slots())
