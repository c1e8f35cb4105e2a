"""
Application-wide constants and configuration values.

This module centralizes the bounds, file names and snapshot markers used
throughout the entity store to eliminate duplication and provide a single
source of truth.
"""

from decimal import Decimal


# =================== VALIDATION CONSTANTS ===================

# Grading scores live in a closed interval
SCORE_MIN = Decimal("0")
SCORE_MAX = Decimal("100")

# Letter grade thresholds, checked highest first
GRADE_THRESHOLDS = [
    (Decimal("80"), "A"),
    (Decimal("70"), "B"),
    (Decimal("60"), "C"),
    (Decimal("50"), "D"),
]
FAILING_GRADE = "F"

# Quantities and balances
MIN_QUANTITY = 0
MIN_BALANCE = Decimal("0")
MONEY_PLACES = 2

# Values treated as "no value" when reading raw text
EMPTY_MARKERS = ("",)


# =================== FILE AND DATA PROCESSING CONSTANTS ===================

DEFAULT_DATA_DIR = "data"
DEFAULT_INVENTORY_FILE = "inventory.json"
DEFAULT_ACCOUNTS_FILE = "accounts.json"
DEFAULT_TRANSACTIONS_FILE = "transactions.json"
DEFAULT_STUDENTS_FILE = "students.json"
DEFAULT_REPORT_FILE = "report.txt"
DEFAULT_ENCODING = "utf-8"
DEFAULT_JSON_INDENT = 2
DEFAULT_CSV_DELIMITER = ","


# =================== SNAPSHOT CONSTANTS ===================

SNAPSHOT_FORMAT = "entity-store.snapshot"
SNAPSHOT_VERSION = 1
SNAPSHOT_TMP_SUFFIX = ".tmp"


# =================== ENVIRONMENT VARIABLE KEYS ===================

class EnvKeys:
    """Centralized environment variable keys to avoid typos and duplication."""

    # Core configuration
    ENVIRONMENT = "ENTITY_STORE_ENV"
    DEBUG = "DEBUG"

    # Storage
    DATA_DIR = "ESTORE_DATA_DIR"
    INVENTORY_FILE = "ESTORE_INVENTORY_FILE"
    ACCOUNTS_FILE = "ESTORE_ACCOUNTS_FILE"
    TRANSACTIONS_FILE = "ESTORE_TRANSACTIONS_FILE"
    STUDENTS_FILE = "ESTORE_STUDENTS_FILE"
    REPORT_FILE = "ESTORE_REPORT_FILE"
    ENCODING = "ESTORE_ENCODING"
    JSON_INDENT = "ESTORE_JSON_INDENT"

    # Validation
    CSV_DELIMITER = "ESTORE_CSV_DELIMITER"

    # Logging
    LOG_LEVEL = "LOG_LEVEL"
    LOG_LEVEL_REPOSITORY = "LOG_LEVEL_REPOSITORY"
    LOG_LEVEL_SERVICES = "LOG_LEVEL_SERVICES"
    LOG_LEVEL_VALIDATION = "LOG_LEVEL_VALIDATION"


# =================== EXPORT ALL CONSTANTS ===================

__all__ = [
    # Validation
    "SCORE_MIN",
    "SCORE_MAX",
    "GRADE_THRESHOLDS",
    "FAILING_GRADE",
    "MIN_QUANTITY",
    "MIN_BALANCE",
    "MONEY_PLACES",
    "EMPTY_MARKERS",

    # Files
    "DEFAULT_DATA_DIR",
    "DEFAULT_INVENTORY_FILE",
    "DEFAULT_ACCOUNTS_FILE",
    "DEFAULT_TRANSACTIONS_FILE",
    "DEFAULT_STUDENTS_FILE",
    "DEFAULT_REPORT_FILE",
    "DEFAULT_ENCODING",
    "DEFAULT_JSON_INDENT",
    "DEFAULT_CSV_DELIMITER",

    # Snapshot
    "SNAPSHOT_FORMAT",
    "SNAPSHOT_VERSION",
    "SNAPSHOT_TMP_SUFFIX",

    # Environment keys
    "EnvKeys",
]
