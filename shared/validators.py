"""
Reusable validators and validation utilities.

This module turns raw external input (strings from files or prompts, values
decoded from snapshots) into validated attribute values. Rules are applied
in a fixed order and the first failure wins:

1. structural completeness -> MissingFieldError
2. format                  -> InvalidFormatError
3. range                   -> InvalidValueError

Every function here is pure: nothing is mutated, input is only classified.
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional, Sequence

from shared.constants import EMPTY_MARKERS, SCORE_MAX, SCORE_MIN
from shared.exceptions import (
    InvalidFormatError,
    InvalidValueError,
    MissingFieldError,
)
from shared.types import FieldKind, FieldSpec


_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in EMPTY_MARKERS
    return False


# =================== STRUCTURAL VALIDATION ===================

def validate_required_fields(
    raw: Mapping[str, Any],
    specs: Sequence[FieldSpec],
    context: str = None
) -> None:
    """
    Check that every required field is present and non-empty.

    Args:
        raw: Raw field name/value mapping
        specs: Field declarations, checked in order
        context: Position of the record (line, index) for error messages

    Raises:
        MissingFieldError: For the first required field that is absent
    """
    for spec in specs:
        if spec.required and _is_missing(raw.get(spec.name)):
            raise MissingFieldError(spec.name, context)


# =================== FORMAT VALIDATION ===================

def parse_integer(value: Any, field: str = "value", context: str = None) -> int:
    """
    Parse an integer from an int or a string of digits.

    Booleans, floats and fractional decimals are rejected.

    Raises:
        InvalidFormatError: If value is not an integer
    """
    if isinstance(value, bool):
        raise InvalidFormatError(field, value, "integer", context)

    if isinstance(value, int):
        return value

    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return int(value)

    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_PATTERN.fullmatch(text):
            return int(text)

    raise InvalidFormatError(field, value, "integer", context)


def parse_decimal(
    value: Any,
    field: str = "value",
    context: str = None,
    places: Optional[int] = None
) -> Decimal:
    """
    Parse a fixed-point decimal amount.

    Args:
        value: int, Decimal, float or numeric string
        field: Field name for error messages
        context: Record position for error messages
        places: Quantize to this many decimal places (half up) when given

    Returns:
        Parsed Decimal

    Raises:
        InvalidFormatError: If value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidFormatError(field, value, "decimal", context)

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float)):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            raise InvalidFormatError(field, value, "decimal", context)
    except InvalidOperation:
        raise InvalidFormatError(field, value, "decimal", context)

    if not amount.is_finite():
        raise InvalidFormatError(field, value, "decimal", context)

    if places is not None:
        amount = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

    return amount


def parse_timestamp(value: Any, field: str = "value", context: str = None) -> datetime:
    """
    Parse an ISO-8601 timestamp.

    Raises:
        InvalidFormatError: If value is not a datetime or ISO string
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            pass

    raise InvalidFormatError(field, value, "ISO-8601 timestamp", context)


def parse_text(value: Any, field: str = "value", context: str = None) -> str:
    """Accept text as-is; anything that is not a string is a format error."""
    if not isinstance(value, str):
        raise InvalidFormatError(field, value, "text", context)
    return value


# =================== RANGE VALIDATION ===================

def validate_range(
    value: Any,
    field: str = "value",
    min_value: Any = None,
    max_value: Any = None,
    context: str = None
) -> Any:
    """
    Check a parsed number against a closed interval.

    Raises:
        InvalidValueError: If value lies outside [min_value, max_value]
    """
    if min_value is not None and max_value is not None:
        if value < min_value or value > max_value:
            raise InvalidValueError(
                field, value, f"must be between {min_value} and {max_value}", context
            )
    elif min_value is not None and value < min_value:
        if min_value == 0:
            raise InvalidValueError(field, value, "cannot be negative", context)
        raise InvalidValueError(field, value, f"must be at least {min_value}", context)
    elif max_value is not None and value > max_value:
        raise InvalidValueError(field, value, f"must be at most {max_value}", context)

    return value


def validate_non_negative(value: Any, field: str = "value", context: str = None) -> Any:
    """Check that a parsed quantity or amount is >= 0."""
    return validate_range(value, field, min_value=0, context=context)


def validate_score(
    value: Any,
    context: str = None,
    score_min: Decimal = SCORE_MIN,
    score_max: Decimal = SCORE_MAX
) -> Decimal:
    """
    Validate a grading score (format then closed range).

    Raises:
        InvalidFormatError: If score is not numeric
        InvalidValueError: If score lies outside [score_min, score_max]
    """
    score = parse_decimal(value, "score", context)
    return validate_range(score, "score", score_min, score_max, context)


# =================== FIELD AND RECORD VALIDATION ===================

def _parse_field(spec: FieldSpec, value: Any, context: str = None) -> Any:
    if spec.kind is FieldKind.INTEGER:
        return parse_integer(value, spec.name, context)
    if spec.kind is FieldKind.DECIMAL:
        return parse_decimal(value, spec.name, context, places=spec.places)
    if spec.kind is FieldKind.TIMESTAMP:
        return parse_timestamp(value, spec.name, context)
    return parse_text(value, spec.name, context)


def _check_range(spec: FieldSpec, value: Any, context: str = None) -> Any:
    if spec.is_numeric and (spec.min_value is not None or spec.max_value is not None):
        return validate_range(value, spec.name, spec.min_value, spec.max_value, context)
    return value


def validate_field(spec: FieldSpec, value: Any, context: str = None) -> Any:
    """
    Validate a single value against its field declaration.

    Returns:
        Parsed value, or None for an absent optional field
    """
    if _is_missing(value):
        if spec.required:
            raise MissingFieldError(spec.name, context)
        return None

    return _check_range(spec, _parse_field(spec, value, context), context)


_PYTHON_TYPES = {
    FieldKind.INTEGER: int,
    FieldKind.DECIMAL: Decimal,
    FieldKind.TIMESTAMP: datetime,
    FieldKind.TEXT: str,
}


def validate_typed_value(spec: FieldSpec, value: Any, context: str = None) -> Any:
    """
    Check an already-typed attribute value, as held by a constructed entity.

    Unlike ``validate_field`` nothing is parsed or rounded: a value that a
    snapshot could not reproduce exactly is rejected.

    Raises:
        MissingFieldError: If a required value is None or blank text
        InvalidFormatError: If the value is not of the field's Python type
        InvalidValueError: If a decimal has too many places or a bound is violated
    """
    if _is_missing(value):
        if spec.required:
            raise MissingFieldError(spec.name, context)
        return value

    expected = _PYTHON_TYPES[spec.kind]
    if isinstance(value, bool) or not isinstance(value, expected):
        raise InvalidFormatError(spec.name, value, spec.kind.value, context)

    if spec.kind is FieldKind.DECIMAL:
        if not value.is_finite():
            raise InvalidFormatError(spec.name, value, spec.kind.value, context)
        if spec.places is not None and value != parse_decimal(value, spec.name, context, spec.places):
            raise InvalidValueError(
                spec.name, value, f"has more than {spec.places} decimal places", context
            )

    return _check_range(spec, value, context)


def validate_record(
    raw: Mapping[str, Any],
    specs: Sequence[FieldSpec],
    context: str = None
) -> Dict[str, Any]:
    """
    Validate a whole raw record.

    Each rule runs over every field before the next rule starts, so a record
    with both a missing field and a malformed one reports the missing field.

    Args:
        raw: Raw field name/value mapping
        specs: Field declarations in entity order
        context: Position of the record for error messages

    Returns:
        Dictionary of parsed values in declaration order

    Raises:
        MissingFieldError, InvalidFormatError, InvalidValueError
    """
    if not isinstance(raw, Mapping):
        raise InvalidFormatError("record", raw, "field mapping", context)

    validate_required_fields(raw, specs, context)

    parsed: Dict[str, Any] = {}
    for spec in specs:
        value = raw.get(spec.name)
        parsed[spec.name] = None if _is_missing(value) else _parse_field(spec, value, context)

    for spec in specs:
        if parsed[spec.name] is not None:
            _check_range(spec, parsed[spec.name], context)

    return parsed


# =================== EXPORT ALL VALIDATORS ===================

__all__ = [
    # Structural validation
    "validate_required_fields",

    # Format validation
    "parse_integer",
    "parse_decimal",
    "parse_timestamp",
    "parse_text",

    # Range validation
    "validate_range",
    "validate_non_negative",
    "validate_score",

    # Composite validators
    "validate_field",
    "validate_typed_value",
    "validate_record",
]
