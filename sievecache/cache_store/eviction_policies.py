"""
Eviction Policies for cache stores.
"""

from .arena import NIL, EntryArena
from .base import EvictionPolicy
from sievecache.exceptions import CacheOperationError


class SieveEvictionPolicy(EvictionPolicy):
    """
    SIEVE eviction: one visited bit per entry and a persistent hand.

    The hand sweeps from the tail (oldest) towards the head (newest). A visited
    entry under the hand has its bit cleared and is skipped; the first
    unvisited entry is the victim. The hand is kept between calls, so each
    eviction resumes where the previous one stopped.
    """

    def __init__(self):
        self.hand = NIL
        self.evicted_count = 0
        self.scanned_count = 0

    def select_victim(self, arena: EntryArena) -> int:
        """
        Sweep the hand until it rests on an unvisited slot.

        The hand is left on the victim; ``on_remove`` moves it to the victim's
        predecessor once the cache removes it.

        Raises:
            CacheOperationError: If the arena holds no entries
        """
        hand = self.hand if self.hand != NIL else arena.tail
        if hand == NIL:
            raise CacheOperationError("Cannot evict from an empty cache")

        # Terminates within two passes: every visited bit seen is cleared.
        while arena.is_visited(hand):
            arena.clear_visited(hand)
            self.scanned_count += 1
            hand = arena.prev_of(hand)
            if hand == NIL:
                hand = arena.tail

        self.hand = hand
        self.evicted_count += 1
        return hand

    def on_remove(self, arena: EntryArena, slot: int) -> None:
        """Step the hand off a slot that is leaving the list."""
        if self.hand == slot:
            self.hand = arena.prev_of(slot)

    def reset(self) -> None:
        self.hand = NIL

    def get_stats(self) -> dict:
        """Get eviction policy statistics."""
        return {
            'policy': type(self).__name__,
            'hand': self.hand,
            'evicted_count': self.evicted_count,
            'scanned_count': self.scanned_count,
        }
