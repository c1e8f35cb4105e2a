from __future__ import annotations

from datetime import datetime
from decimal import Decimal
import sys
from pathlib import Path

import pytest

# Make the top-level packages importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from domain.models import Account, InventoryItem, StudentRecord, Transaction
from repositories.entity_store import EntityStore

ADDED_AT = datetime(2024, 1, 2, 10, 0, 0)

ENV_VARS = [
    "ENTITY_STORE_ENV",
    "DEBUG",
    "ESTORE_DATA_DIR",
    "ESTORE_INVENTORY_FILE",
    "ESTORE_ACCOUNTS_FILE",
    "ESTORE_TRANSACTIONS_FILE",
    "ESTORE_STUDENTS_FILE",
    "ESTORE_REPORT_FILE",
    "ESTORE_ENCODING",
    "ESTORE_JSON_INDENT",
    "ESTORE_CSV_DELIMITER",
    "LOG_LEVEL",
    "LOG_LEVEL_REPOSITORY",
    "LOG_LEVEL_SERVICES",
    "LOG_LEVEL_VALIDATION",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # load_dotenv looks for .env from the working directory
    monkeypatch.chdir(tmp_path)


def make_item(id: int, quantity: int, name: str = None) -> InventoryItem:
    return InventoryItem(id=id, name=name or f"Item {id}", quantity=quantity, date_added=ADDED_AT)


@pytest.fixture
def inventory_store() -> EntityStore:
    return EntityStore(InventoryItem)


@pytest.fixture
def stocked_store(inventory_store) -> EntityStore:
    for id, quantity in [(1, 50), (2, 20), (3, 30)]:
        inventory_store.add(make_item(id, quantity))
    return inventory_store


@pytest.fixture
def account_store() -> EntityStore:
    store = EntityStore(Account)
    store.add(Account("ACC-1", Decimal("100.00")))
    store.add(Account("ACC-2", Decimal("0.00")))
    return store


@pytest.fixture
def transaction_store() -> EntityStore:
    store = EntityStore(Transaction)
    rows = [
        (1, "ACC-1", "25.00", "Groceries"),
        (2, "ACC-2", "10.00", "Transport"),
        (3, "ACC-1", "5.50", "Coffee"),
        (4, "ACC-9", "1.00", "Fees"),
    ]
    for id, account_number, amount, category in rows:
        store.add(Transaction(id, account_number, ADDED_AT, Decimal(amount), category))
    return store


@pytest.fixture
def students() -> list:
    return [
        StudentRecord("S001", "John Doe", Decimal("85")),
        StudentRecord("S002", "Jane Roe", Decimal("72.5")),
        StudentRecord("S003", "Sam Poe", Decimal("40")),
    ]
