"""
Inventory domain model.

Stock items tracked by integer id with a designated-mutable quantity.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, FrozenSet, Tuple

from domain.models.schema import check_invariants
from shared.constants import MIN_QUANTITY
from shared.types import FieldKind, FieldSpec


@dataclass(frozen=True)
class InventoryItem:
    """Immutable inventory record; quantity changes go through the store."""

    id: int
    name: str
    quantity: int
    date_added: datetime

    FIELD_SPECS: ClassVar[Tuple[FieldSpec, ...]] = (
        FieldSpec("id", FieldKind.INTEGER),
        FieldSpec("name", FieldKind.TEXT),
        FieldSpec("quantity", FieldKind.INTEGER, min_value=MIN_QUANTITY),
        FieldSpec("date_added", FieldKind.TIMESTAMP),
    )
    KEY_FIELD: ClassVar[str] = "id"
    MUTABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"quantity"})

    def __post_init__(self):
        check_invariants(self)

    @property
    def key(self) -> int:
        return self.id

    @classmethod
    def create(cls, id: int, name: str, quantity: int) -> InventoryItem:
        """Factory method stamping the creation time."""
        return cls(id=id, name=name, quantity=quantity, date_added=datetime.now())
