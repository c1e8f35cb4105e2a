"""
Domain models - Pure business entities without infrastructure dependencies.

Every entity is a frozen dataclass exposing a ``key`` property plus its
``FIELD_SPECS`` and ``MUTABLE_FIELDS`` declarations.
"""

from domain.models.inventory import InventoryItem
from domain.models.grading import StudentRecord, grade_for_score
from domain.models.finance import Account, Transaction

__all__ = [
    "InventoryItem",
    "StudentRecord",
    "grade_for_score",
    "Account",
    "Transaction",
]
