"""
Finance domain models.

Accounts carry a designated-mutable balance; transactions are immutable and
point at their account by number only. The account -> transactions relation
is rebuilt from the transaction store (see repositories.relations).
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, Tuple

from domain.models.schema import check_invariants
from shared.constants import MIN_BALANCE, MONEY_PLACES
from shared.types import FieldKind, FieldSpec


@dataclass(frozen=True)
class Account:
    """Bank account identified by its account number."""

    account_number: str
    balance: Decimal

    FIELD_SPECS: ClassVar[Tuple[FieldSpec, ...]] = (
        FieldSpec("account_number", FieldKind.TEXT),
        FieldSpec("balance", FieldKind.DECIMAL, min_value=MIN_BALANCE, places=MONEY_PLACES),
    )
    KEY_FIELD: ClassVar[str] = "account_number"
    MUTABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"balance"})

    def __post_init__(self):
        check_invariants(self)

    @property
    def key(self) -> str:
        return self.account_number


@dataclass(frozen=True)
class Transaction:
    """Single money movement recorded against an account."""

    id: int
    account_number: str
    date: datetime
    amount: Decimal
    category: str

    FIELD_SPECS: ClassVar[Tuple[FieldSpec, ...]] = (
        FieldSpec("id", FieldKind.INTEGER),
        FieldSpec("account_number", FieldKind.TEXT),
        FieldSpec("date", FieldKind.TIMESTAMP),
        FieldSpec("amount", FieldKind.DECIMAL, min_value=Decimal("0"), places=MONEY_PLACES),
        FieldSpec("category", FieldKind.TEXT),
    )
    KEY_FIELD: ClassVar[str] = "id"
    MUTABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    def __post_init__(self):
        check_invariants(self)

    @property
    def key(self) -> int:
        return self.id
