"""
Repository layer for entity storage abstraction.

This module provides a clean separation between business logic and storage,
following the Repository pattern for better testability and maintainability.
"""

from repositories.entity_store import EntityStore
from repositories.json_snapshot import JsonSnapshotAdapter
from repositories.relations import build_index, dependents_of, find_orphans

__all__ = [
    "EntityStore",
    "JsonSnapshotAdapter",
    "build_index",
    "dependents_of",
    "find_orphans",
]
