"""
Entity schema helpers.

Entity classes describe themselves through class attributes instead of a
common base class:

- ``FIELD_SPECS``: tuple of FieldSpec in dataclass field order
- ``MUTABLE_FIELDS``: frozenset of designated-mutable field names
- ``KEY_FIELD``: name of the field the ``key`` property returns
"""

from __future__ import annotations
from typing import Any, FrozenSet, Mapping, Optional, Tuple, Type

from shared.types import E, FieldSpec
from shared.validators import validate_field, validate_record, validate_typed_value


def field_specs(entity_type: Type[Any]) -> Tuple[FieldSpec, ...]:
    """Return the ordered field declarations of an entity type."""
    return tuple(getattr(entity_type, "FIELD_SPECS", ()))


def mutable_fields(entity_type: Type[Any]) -> FrozenSet[str]:
    """Return the names of the designated-mutable fields of an entity type."""
    return frozenset(getattr(entity_type, "MUTABLE_FIELDS", frozenset()))


def get_field_spec(entity_type: Type[Any], name: str) -> FieldSpec:
    for spec in field_specs(entity_type):
        if spec.name == name:
            return spec
    raise KeyError(name)


def key_spec(entity_type: Type[Any]) -> Optional[FieldSpec]:
    """Declaration of the key field, None for types that do not name one."""
    name = getattr(entity_type, "KEY_FIELD", None)
    return get_field_spec(entity_type, name) if name else None


def normalize_key(entity_type: Type[Any], key: Any) -> Any:
    """
    Parse a raw key (e.g. the text "1") into the type the store is keyed by.

    Raises:
        MissingFieldError: If the key is empty
        InvalidFormatError: If the key does not parse
    """
    spec = key_spec(entity_type)
    if spec is None:
        return key
    return validate_field(spec, key)


def check_invariants(entity: Any) -> None:
    """
    Enforce the field declarations on an already-typed entity.

    Called from ``__post_init__`` so that no entity with, say, a negative
    quantity, a blank name or a balance with three decimal places can exist.
    Whatever passes here is written to and read back from a snapshot unchanged.

    Raises:
        MissingFieldError: If a required value is None or blank text
        InvalidFormatError: If a value has the wrong type
        InvalidValueError: If a value violates its bounds or decimal places
    """
    for spec in field_specs(type(entity)):
        validate_typed_value(spec, getattr(entity, spec.name))


def build_entity(entity_type: Type[E], raw: Mapping[str, Any], context: str = None) -> E:
    """
    Build an entity from raw field values through the validation rules.

    Raises:
        MissingFieldError, InvalidFormatError, InvalidValueError
    """
    values = validate_record(raw, field_specs(entity_type), context)
    return entity_type(**values)
