"""
Cross-entity relation indexes.

Entities never hold references to each other. A relation such as
"transactions of an account" is a mapping from the parent key to the ordered
keys of its dependents, rebuilt from the child store whenever it is needed.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Hashable, List

from repositories.entity_store import EntityStore


def build_index(
    children: EntityStore,
    parent_key_of: Callable[[Any], Hashable]
) -> Dict[Hashable, List[Hashable]]:
    """
    Group child keys by parent key.

    Args:
        children: Store holding the dependent entities
        parent_key_of: Extracts the parent key from a child entity

    Returns:
        Mapping parent key -> child keys in child insertion order
    """
    index: Dict[Hashable, List[Hashable]] = {}
    for child in children.list_all():
        index.setdefault(parent_key_of(child), []).append(child.key)
    return index


def dependents_of(index: Dict[Hashable, List[Hashable]], parent_key: Hashable) -> List[Hashable]:
    """Child keys of one parent, empty when it has none."""
    return list(index.get(parent_key, []))


def find_orphans(
    parents: EntityStore,
    children: EntityStore,
    parent_key_of: Callable[[Any], Hashable]
) -> List[Hashable]:
    """Keys of children whose parent is not in the parent store."""
    return [
        child.key
        for child in children.list_all()
        if not parents.exists(parent_key_of(child))
    ]
