"""
Common type definitions used throughout the application.

This module centralizes the entity capability protocol, field schema
descriptions and the boundary result type to ensure consistency and avoid
duplication.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import (
    Any,
    Dict,
    Generic,
    Hashable,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from shared.exceptions import EntityStoreError, ErrorKind, create_error_response


# =================== ENTITY CAPABILITY ===================

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


@runtime_checkable
class Keyed(Protocol):
    """Anything the store can hold: it exposes an immutable unique key."""

    @property
    def key(self) -> Hashable:
        ...


E = TypeVar("E", bound=Keyed)


# =================== FIELD SCHEMA TYPES ===================

class FieldKind(Enum):
    """Attribute kinds supported by validation and snapshots."""
    INTEGER = "integer"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"
    TEXT = "text"


@dataclass(frozen=True)
class FieldSpec:
    """Declares one named attribute of an entity and its constraints."""
    name: str
    kind: FieldKind
    required: bool = True
    min_value: Optional[Decimal] = None
    max_value: Optional[Decimal] = None
    places: Optional[int] = None

    @property
    def is_numeric(self) -> bool:
        return self.kind in (FieldKind.INTEGER, FieldKind.DECIMAL)


# =================== BOUNDARY RESULT TYPES ===================

@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a boundary operation: a value or one typed failure."""
    success: bool
    value: Optional[T] = None
    error: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, value: T = None) -> OperationResult[T]:
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, exception: EntityStoreError) -> OperationResult[T]:
        return cls(success=False, error=create_error_response(exception))

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind of a failed result, None on success."""
        if self.success or not self.error:
            return None
        return ErrorKind(self.error["code"])

    @property
    def message(self) -> Optional[str]:
        return self.error["error"] if self.error else None


__all__ = [
    "K",
    "E",
    "T",
    "Keyed",
    "FieldKind",
    "FieldSpec",
    "OperationResult",
]
