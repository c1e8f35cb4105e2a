from datetime import datetime, timezone
from decimal import Decimal

import pytest

from domain.models import InventoryItem, StudentRecord
from shared.exceptions import ErrorKind, InvalidFormatError, InvalidValueError, MissingFieldError
from shared.types import FieldKind, FieldSpec
from shared.validators import (
    parse_decimal,
    parse_integer,
    parse_text,
    parse_timestamp,
    validate_field,
    validate_non_negative,
    validate_range,
    validate_record,
    validate_required_fields,
    validate_score,
)


def test_parse_integer_accepts_ints_and_digit_strings():
    assert parse_integer(42) == 42
    assert parse_integer(" -3 ") == -3
    assert parse_integer(Decimal("7")) == 7


@pytest.mark.parametrize("value", ["4.5", "abc", "", True, 1.5, Decimal("2.5"), None])
def test_parse_integer_rejects_non_integers(value):
    with pytest.raises(InvalidFormatError) as exc:
        parse_integer(value, "quantity")
    assert exc.value.kind is ErrorKind.INVALID_FORMAT
    assert exc.value.field == "quantity"


def test_parse_decimal_quantizes_half_up():
    assert parse_decimal("10.005", places=2) == Decimal("10.01")
    assert parse_decimal(3, places=2) == Decimal("3.00")
    assert parse_decimal(" 72.5 ") == Decimal("72.5")


@pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", "", [], False])
def test_parse_decimal_rejects_non_numbers(value):
    with pytest.raises(InvalidFormatError):
        parse_decimal(value, "amount")


def test_parse_timestamp_reads_iso_text():
    assert parse_timestamp("2024-01-02T10:00:00") == datetime(2024, 1, 2, 10, 0, 0)
    assert parse_timestamp("2024-01-02T10:00:00Z").tzinfo == timezone.utc

    with pytest.raises(InvalidFormatError):
        parse_timestamp("yesterday", "date_added")


def test_parse_text_requires_string():
    assert parse_text("Rice Bag") == "Rice Bag"
    with pytest.raises(InvalidFormatError):
        parse_text(12, "name")


def test_validate_range_messages():
    with pytest.raises(InvalidValueError) as exc:
        validate_non_negative(-1, "quantity")
    assert exc.value.message == "Invalid quantity: cannot be negative"

    with pytest.raises(InvalidValueError) as exc:
        validate_range(Decimal("101"), "score", Decimal("0"), Decimal("100"))
    assert "must be between 0 and 100" in exc.value.message

    with pytest.raises(InvalidValueError) as exc:
        validate_range(3, "level", min_value=5)
    assert "must be at least 5" in exc.value.message

    assert validate_range(0, "quantity", min_value=0) == 0


def test_validate_score_checks_format_then_range():
    assert validate_score("100") == Decimal("100")
    assert validate_score("0") == Decimal("0")

    with pytest.raises(InvalidFormatError):
        validate_score("ninety")
    with pytest.raises(InvalidValueError):
        validate_score("100.5")
    with pytest.raises(InvalidValueError):
        validate_score("-1", context="Line 4")


def test_validate_required_fields_treats_blank_as_missing():
    specs = StudentRecord.FIELD_SPECS
    with pytest.raises(MissingFieldError) as exc:
        validate_required_fields({"id": "S1", "full_name": "   ", "score": "50"}, specs)
    assert exc.value.field == "full_name"


def test_validate_field_optional_missing_is_none():
    spec = FieldSpec("note", FieldKind.TEXT, required=False)
    assert validate_field(spec, "") is None
    assert validate_field(spec, "hello") == "hello"


def test_validate_record_reports_missing_before_format():
    raw = {"id": "S1", "full_name": "", "score": "abc"}
    with pytest.raises(MissingFieldError):
        validate_record(raw, StudentRecord.FIELD_SPECS)


def test_validate_record_reports_format_before_range():
    raw = {"id": "not-a-number", "name": "Rice", "quantity": "-5", "date_added": "2024-01-02T10:00:00"}
    with pytest.raises(InvalidFormatError) as exc:
        validate_record(raw, InventoryItem.FIELD_SPECS)
    assert exc.value.field == "id"


def test_validate_record_prefixes_context():
    raw = {"id": "S1", "full_name": "John", "score": "150"}
    with pytest.raises(InvalidValueError) as exc:
        validate_record(raw, StudentRecord.FIELD_SPECS, context="Line 3")
    assert exc.value.message.startswith("Line 3: ")
    assert exc.value.context == "Line 3"


def test_validate_record_returns_parsed_values_in_order():
    raw = {"date_added": "2024-01-02T10:00:00", "quantity": "5", "name": "Rice", "id": "1"}
    values = validate_record(raw, InventoryItem.FIELD_SPECS)
    assert list(values) == ["id", "name", "quantity", "date_added"]
    assert values["id"] == 1
    assert values["quantity"] == 5


def test_validate_record_rejects_non_mapping():
    with pytest.raises(InvalidFormatError):
        validate_record(["1", "Rice"], InventoryItem.FIELD_SPECS)
