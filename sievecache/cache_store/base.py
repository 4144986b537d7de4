"""
Base classes for cache stores and eviction policies.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


class BaseCacheStore(ABC, Generic[K, V]):
    """Abstract base class for fixed-capacity in-memory caches."""

    @abstractmethod
    def get(self, key: K) -> Tuple[Optional[V], bool]:
        """
        Look up a key.

        Args:
            key: The key to look up.

        Returns:
            (value, True) on a hit, (None, False) on a miss.
        """
        pass

    @abstractmethod
    def add(self, key: K, value: V) -> bool:
        """
        Insert or overwrite a key.

        Args:
            key: The key to store.
            value: The value to store.

        Returns:
            bool: True if an existing value was replaced, False if the key is new.
        """
        pass

    @abstractmethod
    def probe(self, key: K, value: V) -> Tuple[V, bool]:
        """
        Insert a key only if it is absent.

        Args:
            key: The key to look up or store.
            value: The value to store on a miss.

        Returns:
            (stored_value, True) if the key was present, (value, False) if it
            was inserted.
        """
        pass

    @abstractmethod
    def delete(self, key: K) -> bool:
        """
        Remove a key.

        Args:
            key: The key to delete

        Returns:
            bool: True if the key was found and deleted, False otherwise
        """
        pass

    @abstractmethod
    def purge(self) -> None:
        """Remove every entry, keeping the capacity."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Get the number of cached items."""
        pass

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Get the maximum number of cached items."""
        pass

    @abstractmethod
    def get_eviction_policy(self) -> 'EvictionPolicy':
        """Get the eviction policy for this cache store."""
        pass


class EvictionPolicy(ABC):
    """
    Abstract base class for eviction policies operating on an ``EntryArena``.

    A policy only chooses victims; the owning cache performs the removal and
    calls ``on_remove`` before a slot is unlinked so the policy can repair any
    cursor it keeps.
    """

    @abstractmethod
    def select_victim(self, arena: Any) -> int:
        """
        Choose the slot to evict.

        Args:
            arena: The arena holding the live entries

        Returns:
            int: Slot number of the victim
        """
        pass

    @abstractmethod
    def on_remove(self, arena: Any, slot: int) -> None:
        """
        Notify the policy that a live slot is about to be unlinked.

        Args:
            arena: The arena holding the live entries
            slot: The slot being removed
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Forget all per-entry state, used when the cache is purged."""
        pass
