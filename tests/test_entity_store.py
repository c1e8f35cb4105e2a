from decimal import Decimal

import pytest

from conftest import ADDED_AT, make_item
from domain.models import Account, InventoryItem, StudentRecord
from repositories.entity_store import EntityStore
from shared.exceptions import (
    DuplicateKeyError,
    EntityNotFoundError,
    ErrorKind,
    InvalidFormatError,
    InvalidValueError,
    MissingFieldError,
)
from shared.types import Keyed


def test_add_distinct_keys_and_lookup(inventory_store):
    inventory_store.add(make_item(1, 50))
    inventory_store.add(make_item(2, 20))

    assert inventory_store.count() == 2
    assert inventory_store.get_by_id(2).quantity == 20
    assert inventory_store.exists(1)
    assert 3 not in inventory_store
    assert inventory_store.get_by_id(3) is None


def test_duplicate_add_keeps_original(inventory_store):
    inventory_store.add(make_item(1, 50))

    with pytest.raises(DuplicateKeyError) as exc:
        inventory_store.add(make_item(1, 99, name="Other"))

    assert exc.value.kind is ErrorKind.DUPLICATE_KEY
    assert exc.value.key == 1
    items = inventory_store.list_all()
    assert len(items) == 1
    assert items[0].quantity == 50
    assert items[0].name == "Item 1"


def test_list_all_keeps_insertion_order_and_is_a_copy(stocked_store):
    items = stocked_store.list_all()
    assert [item.id for item in items] == [1, 2, 3]

    items.clear()
    assert stocked_store.count() == 3
    assert stocked_store.keys() == [1, 2, 3]


def test_remove_then_lookup_then_remove_again(stocked_store):
    stocked_store.remove(2)
    assert stocked_store.get_by_id(2) is None
    assert stocked_store.keys() == [1, 3]

    with pytest.raises(EntityNotFoundError) as exc:
        stocked_store.remove(2)
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_update_quantity_is_visible_on_next_lookup(stocked_store):
    updated = stocked_store.update_quantity(2, 0)

    assert updated.quantity == 0
    assert stocked_store.get_by_id(2).quantity == 0
    assert stocked_store.get_by_id(2).date_added == ADDED_AT
    # position in insertion order is kept
    assert stocked_store.keys() == [1, 2, 3]


def test_update_quantity_parses_raw_text(stocked_store):
    assert stocked_store.update_quantity(1, " 75 ").quantity == 75


def test_negative_quantity_rejected_and_store_unchanged(stocked_store):
    with pytest.raises(InvalidValueError) as exc:
        stocked_store.update_quantity(1, -1)

    assert exc.value.field == "quantity"
    assert stocked_store.get_by_id(1).quantity == 50


def test_malformed_quantity_is_format_error(stocked_store):
    with pytest.raises(InvalidFormatError):
        stocked_store.update_quantity(1, "lots")
    assert stocked_store.get_by_id(1).quantity == 50


def test_update_missing_key_leaves_store_unchanged(inventory_store):
    inventory_store.add(make_item(1, 50))
    before = inventory_store.list_all()

    with pytest.raises(EntityNotFoundError):
        inventory_store.update_quantity(2, 10)

    assert inventory_store.list_all() == before


def test_update_of_non_mutable_field_rejected(stocked_store):
    with pytest.raises(InvalidValueError) as exc:
        stocked_store.update_field(1, "name", "Renamed")
    assert "not updatable" in exc.value.message
    assert stocked_store.get_by_id(1).name == "Item 1"


def test_student_records_have_no_mutable_fields():
    store = EntityStore(StudentRecord)
    store.add(StudentRecord("S001", "John Doe", Decimal("85")))

    with pytest.raises(InvalidValueError):
        store.update_field("S001", "score", "90")


def test_update_field_on_decimal_balance():
    store = EntityStore(Account)
    store.add(Account("ACC-1", Decimal("10.00")))

    updated = store.update_field("ACC-1", "balance", "12.345")
    assert updated.balance == Decimal("12.35")

    with pytest.raises(InvalidValueError):
        store.update_field("ACC-1", "balance", "-0.01")
    assert store.get_by_id("ACC-1").balance == Decimal("12.35")


def test_add_many_is_all_or_nothing(stocked_store):
    with pytest.raises(DuplicateKeyError):
        stocked_store.add_many([make_item(4, 1), make_item(5, 1), make_item(4, 2)])
    assert stocked_store.keys() == [1, 2, 3]

    with pytest.raises(DuplicateKeyError):
        stocked_store.add_many([make_item(6, 1), make_item(1, 1)])
    assert stocked_store.keys() == [1, 2, 3]

    assert stocked_store.add_many([make_item(4, 1), make_item(5, 2)]) == 2
    assert stocked_store.keys() == [1, 2, 3, 4, 5]


def test_replace_all_with_duplicates_keeps_contents(stocked_store):
    with pytest.raises(DuplicateKeyError):
        stocked_store.replace_all([make_item(7, 1), make_item(7, 2)])
    assert stocked_store.keys() == [1, 2, 3]

    assert stocked_store.replace_all([make_item(9, 4)]) == 1
    assert stocked_store.keys() == [9]


def test_store_rejects_other_entity_types(inventory_store):
    with pytest.raises(InvalidValueError) as exc:
        inventory_store.add(Account("ACC-1", Decimal("1")))
    assert exc.value.field == "entity"
    assert "holds InventoryItem, got Account" in exc.value.message

    with pytest.raises(InvalidValueError):
        inventory_store.add_many([make_item(1, 1), Account("ACC-1", Decimal("1"))])
    assert inventory_store.count() == 0


def test_entities_cannot_be_built_invalid():
    with pytest.raises(InvalidValueError):
        InventoryItem(id=1, name="Rice", quantity=-1, date_added=ADDED_AT)
    with pytest.raises(InvalidValueError):
        StudentRecord("S1", "John", Decimal("101"))


@pytest.mark.parametrize(
    "build",
    [
        lambda: InventoryItem(1, "", 5, ADDED_AT),
        lambda: InventoryItem(1, "   ", 5, ADDED_AT),
        lambda: Account("", Decimal("1.00")),
        lambda: InventoryItem(1, "Rice", None, ADDED_AT),
    ],
)
def test_blank_or_absent_required_values_rejected(build):
    with pytest.raises(MissingFieldError):
        build()


@pytest.mark.parametrize(
    "build",
    [
        lambda: InventoryItem("1", "Rice", 5, ADDED_AT),
        lambda: InventoryItem(1, "Rice", True, ADDED_AT),
        lambda: InventoryItem(1, "Rice", 5, "2024-01-02"),
        lambda: Account("ACC-1", 10),
        lambda: Account("ACC-1", Decimal("NaN")),
        lambda: StudentRecord("S1", 42, Decimal("50")),
    ],
)
def test_wrongly_typed_values_rejected(build):
    with pytest.raises(InvalidFormatError):
        build()


def test_money_with_too_many_places_rejected():
    with pytest.raises(InvalidValueError) as exc:
        Account("ACC-1", Decimal("1.005"))
    assert "more than 2 decimal places" in exc.value.message

    assert Account("ACC-1", Decimal("1.5")).balance == Decimal("1.50")


def test_entities_satisfy_keyed_protocol():
    assert isinstance(make_item(1, 1), Keyed)
    assert isinstance(Account("ACC-1", Decimal("1")), Keyed)


def test_clear_and_repr(stocked_store):
    assert repr(stocked_store) == "EntityStore(InventoryItem, 3 entities)"
    stocked_store.clear()
    assert len(stocked_store) == 0
