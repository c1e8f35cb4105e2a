"""
In-memory entity store providing keyed CRUD operations.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Dict, Generic, Iterable, List, Optional, Type
import logging

from domain.models.schema import get_field_spec, mutable_fields
from shared.exceptions import DuplicateKeyError, EntityNotFoundError, InvalidValueError
from shared.types import E, K
from shared.validators import validate_field

logger = logging.getLogger(__name__)


class EntityStore(Generic[K, E]):
    """
    Keyed collection of entities with uniqueness and existence invariants.

    Keys are unique and listing follows insertion order. Every mutating
    operation checks its preconditions before touching the mapping, so a
    failed call leaves the store exactly as it was. Not thread-safe: a
    multi-threaded host must serialize access to one instance.
    """

    def __init__(self, entity_type: Type[E], name: Optional[str] = None):
        self.entity_type = entity_type
        self.name = name or entity_type.__name__
        self._items: Dict[K, E] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: Any) -> bool:
        return key in self._items

    def __repr__(self) -> str:
        return f"EntityStore({self.name}, {len(self._items)} entities)"

    # -------------------------- reads --------------------------
    def get_by_id(self, key: K) -> Optional[E]:
        """Get entity by key, None when absent."""
        return self._items.get(key)

    def exists(self, key: K) -> bool:
        return key in self._items

    def list_all(self) -> List[E]:
        """Get all entities in insertion order as a fresh list."""
        return list(self._items.values())

    def keys(self) -> List[K]:
        return list(self._items.keys())

    def count(self) -> int:
        return len(self._items)

    # -------------------------- mutations --------------------------
    def add(self, entity: E) -> None:
        """
        Add a new entity.

        Raises:
            DuplicateKeyError: If an entity with the same key exists
            InvalidValueError: If the entity is not of the store's type
        """
        self._check_type(entity)
        key = entity.key
        if key in self._items:
            raise DuplicateKeyError(self.name, key)
        self._items[key] = entity
        logger.debug(f"Added {self.name} {key!r}")

    def add_many(self, entities: Iterable[E]) -> int:
        """
        Add a batch of entities, all or nothing.

        Keys are checked against the store and within the batch before the
        first insert.

        Returns:
            Number of entities added

        Raises:
            DuplicateKeyError: On the first clashing key; nothing is added
        """
        batch = list(entities)
        seen = set()
        for entity in batch:
            self._check_type(entity)
            key = entity.key
            if key in self._items or key in seen:
                raise DuplicateKeyError(self.name, key, details={"batch_size": len(batch)})
            seen.add(key)

        for entity in batch:
            self._items[entity.key] = entity
        logger.debug(f"Added {len(batch)} {self.name} entities")
        return len(batch)

    def update_field(self, key: K, field: str, new_value: Any) -> E:
        """
        Replace one designated-mutable field of an existing entity.

        The new value may be raw text; it goes through the field's
        validation rules. The stored entity is swapped for a new frozen
        version, keeping its position in insertion order.

        Returns:
            The updated entity

        Raises:
            EntityNotFoundError: If the key is absent
            InvalidValueError: If the field is not mutable or the value is out of range
            InvalidFormatError: If the value does not parse
        """
        current = self._items.get(key)
        if current is None:
            raise EntityNotFoundError(self.name, key)

        if field not in mutable_fields(self.entity_type):
            raise InvalidValueError(field, new_value, f"{self.name}.{field} is not updatable")

        value = validate_field(get_field_spec(self.entity_type, field), new_value)
        updated = replace(current, **{field: value})
        self._items[key] = updated
        logger.debug(f"Updated {self.name} {key!r}: {field}={value!r}")
        return updated

    def update_quantity(self, key: K, new_quantity: Any) -> E:
        """
        Set the quantity of an existing entity.

        Raises:
            EntityNotFoundError: If the key is absent
            InvalidValueError: If the quantity is negative
        """
        return self.update_field(key, "quantity", new_quantity)

    def remove(self, key: K) -> None:
        """
        Delete entity by key.

        Raises:
            EntityNotFoundError: If the key is absent
        """
        if key not in self._items:
            raise EntityNotFoundError(self.name, key)
        del self._items[key]
        logger.debug(f"Removed {self.name} {key!r}")

    def replace_all(self, entities: Iterable[E]) -> int:
        """
        Replace the whole contents with a new set of entities.

        The new mapping is built aside and swapped in only once it is
        complete, so a duplicate key leaves the current contents untouched.

        Returns:
            Number of entities now held

        Raises:
            DuplicateKeyError: If the input repeats a key
        """
        fresh: Dict[K, E] = {}
        for entity in entities:
            self._check_type(entity)
            if entity.key in fresh:
                raise DuplicateKeyError(self.name, entity.key)
            fresh[entity.key] = entity

        self._items = fresh
        logger.debug(f"Replaced {self.name} contents with {len(fresh)} entities")
        return len(fresh)

    def clear(self) -> None:
        self._items = {}

    def _check_type(self, entity: Any) -> None:
        if not isinstance(entity, self.entity_type):
            raise InvalidValueError(
                "entity",
                type(entity).__name__,
                f"{self.name} store holds {self.entity_type.__name__}, got {type(entity).__name__}",
            )
