"""
Account Service - Balance operations on stored accounts.

Deposits and withdrawals each change the balance of exactly one Account
through the store's guarded update, so the non-negative balance invariant
is checked in one place.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any
import logging

from domain.models import Account
from repositories.entity_store import EntityStore
from shared.constants import MONEY_PLACES
from shared.exceptions import EntityNotFoundError, InvalidValueError
from shared.validators import parse_decimal

logger = logging.getLogger(__name__)


class AccountService:
    """Deposit and withdraw against an account store."""

    def __init__(self, store: EntityStore[str, Account]):
        if store.entity_type is not Account:
            raise TypeError(f"AccountService needs an Account store, got {store.name}")
        self.store = store

    def _get_account(self, account_number: str) -> Account:
        account = self.store.get_by_id(account_number)
        if account is None:
            raise EntityNotFoundError(self.store.name, account_number)
        return account

    def _parse_amount(self, amount: Any) -> Decimal:
        value = parse_decimal(amount, "amount", places=MONEY_PLACES)
        if value <= 0:
            raise InvalidValueError("amount", value, "must be positive")
        return value

    def deposit(self, account_number: str, amount: Any) -> Account:
        """
        Add a positive amount to the balance.

        Returns:
            The updated account

        Raises:
            EntityNotFoundError: If the account does not exist
            InvalidFormatError: If amount is not a number
            InvalidValueError: If amount is zero or negative
        """
        account = self._get_account(account_number)
        value = self._parse_amount(amount)
        updated = self.store.update_field(account_number, "balance", account.balance + value)
        logger.info(f"Deposited {value} to {account_number}, balance {updated.balance}")
        return updated

    def withdraw(self, account_number: str, amount: Any) -> Account:
        """
        Take a positive amount from the balance.

        Raises:
            EntityNotFoundError: If the account does not exist
            InvalidValueError: If amount is not positive or exceeds the balance
        """
        account = self._get_account(account_number)
        value = self._parse_amount(amount)
        if value > account.balance:
            raise InvalidValueError("amount", value, "Insufficient funds")

        updated = self.store.update_field(account_number, "balance", account.balance - value)
        logger.info(f"Withdrew {value} from {account_number}, balance {updated.balance}")
        return updated
