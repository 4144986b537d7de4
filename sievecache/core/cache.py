"""
Thread-safe SIEVE cache.

``SieveCache`` combines a dict index (key -> slot), an ``EntryArena`` holding
the entries in insertion order, and a ``SieveEvictionPolicy`` owning the hand.
Every public method holds one exclusive lock for its whole duration, so each
call is atomic with respect to every other.
"""

import dataclasses
import logging
import numbers
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, TextIO, Tuple

from pydantic import BaseModel, Field, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from sievecache.cache_store.arena import EntryArena
from sievecache.cache_store.base import BaseCacheStore, EvictionPolicy, K, V
from sievecache.cache_store.eviction_policies import SieveEvictionPolicy
from sievecache.exceptions import ConfigurationError
from sievecache.utils.logging import get_cache_event_logger

logger = logging.getLogger(__name__)


@dataclass
class CacheMetrics:
    """
    Counters for cache operations.

    Attributes:
        hits: Lookups (get or probe) that found the key
        misses: Lookups (get or probe) that did not find the key
        inserts: New entries added by add or probe
        replacements: Values overwritten by add
        evictions: Entries removed to make room
        deletions: Entries removed by delete
        purges: Number of purge calls
        current_size: Number of items in the cache when the snapshot was taken
        max_size: Cache capacity
    """
    hits: int = 0
    misses: int = 0
    inserts: int = 0
    replacements: int = 0
    evictions: int = 0
    deletions: int = 0
    purges: int = 0
    current_size: int = 0
    max_size: int = 0

    @property
    def hit_rate(self) -> float:
        """Hits over lookups, 0.0 before the first lookup."""
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups > 0 else 0.0

    def to_dict(self) -> dict:
        """Convert metrics to a dictionary for easy serialization."""
        data = dataclasses.asdict(self)
        data['hit_rate'] = self.hit_rate
        return data

    def __str__(self) -> str:
        return (
            f"CacheMetrics(hits={self.hits}, misses={self.misses}, "
            f"hit_rate={self.hit_rate:.1%}, size={self.current_size}/{self.max_size}, "
            f"evictions={self.evictions})"
        )


class SieveCache(BaseCacheStore[K, V]):
    """
    Fixed-capacity in-memory cache with SIEVE eviction.

    Hits set a per-entry visited bit and never reorder entries. When an
    insert finds the cache full, the hand sweeps from the oldest entry towards
    the newest, clearing visited bits until it finds an unvisited entry, and
    evicts that one.

    Args:
        capacity: Maximum number of entries, a positive integer (``int`` or a
            numpy integer; ``bool`` is rejected)
        name: Label used in log records
        log_evictions: Emit a DEBUG event record for every eviction
        eviction_policy: Policy choosing eviction victims (defaults to SIEVE)

    Raises:
        ConfigurationError: If capacity is not a positive integer
    """

    class Config(BaseModel):
        """Configuration for SieveCache."""
        capacity: StrictInt = Field(gt=0)
        name: str = "sieve"
        log_evictions: bool = False

        @field_validator("capacity", mode="before")
        @classmethod
        def integral_capacity(cls, value: Any) -> Any:
            # numpy integers are accepted; bool and float are still rejected
            if isinstance(value, numbers.Integral) and not isinstance(value, bool):
                return int(value)
            return value

    def __init__(
        self,
        capacity: int,
        name: str = "sieve",
        log_evictions: bool = False,
        eviction_policy: Optional[EvictionPolicy] = None,
    ):
        try:
            self.config = self.Config(
                capacity=capacity,
                name=name,
                log_evictions=log_evictions
            )
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid cache configuration (capacity={capacity!r})", e
            ) from e

        self._capacity = self.config.capacity
        self._lock = threading.Lock()
        self._index: Dict[K, int] = {}
        self._arena = EntryArena(self._capacity)
        self._policy = eviction_policy or SieveEvictionPolicy()
        self._metrics = CacheMetrics(max_size=self._capacity)
        self._events = get_cache_event_logger()

        logger.debug(f"Created {type(self).__name__} '{self.config.name}' with capacity {self._capacity}")

    def get(self, key: K) -> Tuple[Optional[V], bool]:
        with self._lock:
            slot = self._index.get(key)
            if slot is None:
                self._metrics.misses += 1
                return None, False

            self._arena.mark_visited(slot)
            self._metrics.hits += 1
            return self._arena.values[slot], True

    def add(self, key: K, value: V) -> bool:
        """
        Add a new entry, or overwrite the value of an existing one.

        Overwriting marks the entry visited and keeps its list position.

        Returns:
            bool: True if the key existed and its value was replaced
        """
        with self._lock:
            slot = self._index.get(key)
            if slot is not None:
                self._arena.values[slot] = value
                self._arena.mark_visited(slot)
                self._metrics.replacements += 1
                return True

            evicted = self._insert(key, value)

        self._log_eviction(evicted)
        return False

    def probe(self, key: K, value: V) -> Tuple[V, bool]:
        """
        Add ``key`` with ``value`` only if it is not already cached.

        Returns:
            (stored_value, True) when the key is present; ``value`` is
            discarded. (value, False) when the key was absent and has been
            inserted.
        """
        with self._lock:
            slot = self._index.get(key)
            if slot is not None:
                self._arena.mark_visited(slot)
                self._metrics.hits += 1
                return self._arena.values[slot], True

            self._metrics.misses += 1
            evicted = self._insert(key, value)

        self._log_eviction(evicted)
        return value, False

    def delete(self, key: K) -> bool:
        with self._lock:
            slot = self._index.get(key)
            if slot is None:
                return False

            self._remove(slot)
            self._metrics.deletions += 1
            return True

    def purge(self) -> None:
        with self._lock:
            dropped = len(self._index)
            self._index.clear()
            self._arena.clear()
            self._policy.reset()
            self._metrics.purges += 1

        self._events.log_purge(self.config.name, dropped)

    def __len__(self) -> int:
        with self._lock:
            return self._arena.size

    @property
    def capacity(self) -> int:
        return self._capacity

    def get_eviction_policy(self) -> EvictionPolicy:
        return self._policy

    def get_metrics(self) -> CacheMetrics:
        """
        Get a snapshot of the current cache metrics.

        Returns:
            CacheMetrics: A copy; later operations do not change it
        """
        with self._lock:
            self._metrics.current_size = self._arena.size
            return dataclasses.replace(self._metrics)

    def reset_metrics(self) -> None:
        """Zero every counter."""
        with self._lock:
            self._metrics = CacheMetrics(max_size=self._capacity)

    def dump(self, writer: TextIO) -> None:
        """
        Write every entry, newest first, to ``writer``.

        Diagnostic only. The snapshot is built and written while the lock is
        held so it reflects a single consistent state.

        Args:
            writer: Any object with a ``write(str)`` method
        """
        with self._lock:
            arena = self._arena
            lines = [f"cache<{type(self).__name__}>: size {arena.size}, cap {self._capacity}\n"]
            for slot in arena.iter_slots():
                lines.append(
                    f"  visited={arena.is_visited(slot)}, "
                    f"key={arena.keys[slot]!r}, val={arena.values[slot]!r}\n"
                )
            writer.write("".join(lines))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.config.name!r}, capacity={self._capacity})"

    def _log_eviction(self, evicted: Optional[Tuple[K, int]]) -> None:
        # Called after the lock is released.
        if evicted is not None and self.config.log_evictions:
            key, size = evicted
            self._events.log_eviction(self.config.name, key, size=size)

    # Caller must hold the lock for everything below.

    def _insert(self, key: K, value: V) -> Optional[Tuple[K, int]]:
        """Insert a new entry; returns (evicted key, size after eviction) or None."""
        evicted = None
        if self._arena.free_slots == 0:
            evicted = self._evict()

        slot = self._arena.allocate(key, value)
        self._arena.push_front(slot)
        self._index[key] = slot
        self._metrics.inserts += 1
        return evicted

    def _evict(self) -> Tuple[K, int]:
        slot = self._policy.select_victim(self._arena)
        key = self._arena.keys[slot]
        self._remove(slot)
        self._metrics.evictions += 1
        return key, self._arena.size

    def _remove(self, slot: int) -> None:
        """Drop a live slot from the index, the list and the arena."""
        self._policy.on_remove(self._arena, slot)
        del self._index[self._arena.keys[slot]]
        self._arena.unlink(slot)
        self._arena.release(slot)
