"""
Slot arena backing the SIEVE eviction list.

Entries live in fixed, capacity-sized columns addressed by integer slot
numbers. The link and visited columns are numpy arrays; keys and values are
plain Python lists so that arbitrary objects can be stored.

Live slots form a doubly linked list (newest at ``head``, oldest at ``tail``).
Unused slots form a singly linked free list threaded through the ``next``
column, so allocation and release are O(1) and never touch the allocator.
"""

from typing import Any, Iterator, List

import numpy as np

from sievecache.exceptions import CacheOperationError

# Sentinel for "no link"
NIL = -1


class EntryArena:
    """
    Fixed-size pool of cache entries linked in insertion order.

    The arena owns entry storage. Callers refer to entries only by slot number
    and must hold whatever lock protects the owning cache.

    Args:
        capacity: Number of slots to pre-allocate
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.keys: List[Any] = [None] * capacity
        self.values: List[Any] = [None] * capacity
        self.visited = np.zeros(capacity, dtype=np.bool_)
        self.in_use = np.zeros(capacity, dtype=np.bool_)
        self.prev = np.full(capacity, NIL, dtype=np.int64)
        self.next = np.full(capacity, NIL, dtype=np.int64)

        self.head = NIL
        self.tail = NIL
        self.size = 0
        self._free_head = NIL
        self._reset_free_list()

    def _reset_free_list(self) -> None:
        """Chain every slot onto the free list, lowest slot first."""
        self.prev.fill(NIL)
        if self.capacity == 0:
            self._free_head = NIL
            return
        self.next[:-1] = np.arange(1, self.capacity, dtype=np.int64)
        self.next[-1] = NIL
        self._free_head = 0

    @property
    def free_slots(self) -> int:
        return self.capacity - self.size

    def allocate(self, key: Any, value: Any) -> int:
        """
        Take a slot from the free list and fill it.

        The slot is not linked into the list; call ``push_front`` for that.

        Args:
            key: Entry key
            value: Entry value

        Returns:
            int: The allocated slot number

        Raises:
            CacheOperationError: If every slot is in use
        """
        slot = self._free_head
        if slot == NIL:
            raise CacheOperationError(
                f"Entry arena exhausted: all {self.capacity} slots are in use"
            )

        self._free_head = int(self.next[slot])
        self.keys[slot] = key
        self.values[slot] = value
        self.visited[slot] = False
        self.in_use[slot] = True
        self.prev[slot] = NIL
        self.next[slot] = NIL
        return slot

    def push_front(self, slot: int) -> None:
        """Link an allocated slot in as the new head."""
        self.prev[slot] = NIL
        self.next[slot] = self.head
        if self.head != NIL:
            self.prev[self.head] = slot
        self.head = slot
        if self.tail == NIL:
            self.tail = slot
        self.size += 1

    def unlink(self, slot: int) -> None:
        """Detach a live slot from the list, fixing up head and tail."""
        prev_slot = int(self.prev[slot])
        next_slot = int(self.next[slot])

        if prev_slot != NIL:
            self.next[prev_slot] = next_slot
        else:
            self.head = next_slot
        if next_slot != NIL:
            self.prev[next_slot] = prev_slot
        else:
            self.tail = prev_slot

        self.prev[slot] = NIL
        self.next[slot] = NIL
        self.size -= 1

    def release(self, slot: int) -> None:
        """
        Return an unlinked slot to the free list.

        Key and value references are dropped so the stored objects can be
        garbage collected.
        """
        if not self.in_use[slot]:
            raise CacheOperationError(f"Slot {slot} is already free")

        self.keys[slot] = None
        self.values[slot] = None
        self.visited[slot] = False
        self.in_use[slot] = False
        self.prev[slot] = NIL
        self.next[slot] = self._free_head
        self._free_head = slot

    def clear(self) -> None:
        """Drop every entry and put all slots back on the free list."""
        self.keys = [None] * self.capacity
        self.values = [None] * self.capacity
        self.visited.fill(False)
        self.in_use.fill(False)
        self._reset_free_list()
        self.head = NIL
        self.tail = NIL
        self.size = 0

    def prev_of(self, slot: int) -> int:
        return int(self.prev[slot])

    def next_of(self, slot: int) -> int:
        return int(self.next[slot])

    def is_visited(self, slot: int) -> bool:
        return bool(self.visited[slot])

    def mark_visited(self, slot: int) -> None:
        self.visited[slot] = True

    def clear_visited(self, slot: int) -> None:
        self.visited[slot] = False

    def iter_slots(self) -> Iterator[int]:
        """Yield live slots from head (newest) to tail (oldest)."""
        slot = self.head
        while slot != NIL:
            yield slot
            slot = int(self.next[slot])
