"""
Cache store package for sievecache.

This package contains the cache store base classes, the slot arena backing the
eviction list, and the eviction policies.
"""

# Base classes
from .base import BaseCacheStore, EvictionPolicy

# Entry storage
from .arena import EntryArena, NIL

# Eviction Policies
from .eviction_policies import SieveEvictionPolicy

__all__ = [
    # Base classes
    "BaseCacheStore",
    "EvictionPolicy",
    # Entry storage
    "EntryArena",
    "NIL",
    # Eviction Policies
    "SieveEvictionPolicy",
]
