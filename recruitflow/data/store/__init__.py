"""
Entity store adapters for RecruitFlow.

- base: the adapter interface and entity kinds
- memory: isolated in-process store
- mongo: MongoDB-backed store
"""

from typing import Optional

from .base import DEFAULT_ORDER, EntityKind, EntityStore, SortOrder
from .memory import InMemoryEntityStore, matches_filter
from .mongo import MongoEntityStore

# Default store used when a repository is built without one
_store: Optional[EntityStore] = None


def get_entity_store() -> EntityStore:
    """Get the default entity store (MongoDB, created lazily)."""
    global _store
    if _store is None:
        _store = MongoEntityStore()
    return _store


def set_entity_store(store: Optional[EntityStore]) -> None:
    """Replace the default entity store; ``None`` resets it."""
    global _store
    _store = store


__all__ = [
    "DEFAULT_ORDER",
    "EntityKind",
    "EntityStore",
    "InMemoryEntityStore",
    "MongoEntityStore",
    "SortOrder",
    "get_entity_store",
    "matches_filter",
    "set_entity_store",
]
