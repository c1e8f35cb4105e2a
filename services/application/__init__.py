"""
Application Services - Boundary and workflow services.

This module contains the services a user interface talks to: the
result-returning wrapper around one entity store and the account balance
operations.
"""

from services.application.repository_service import RepositoryService, create_service
from services.application.account_service import AccountService

__all__ = [
    "RepositoryService",
    "create_service",
    "AccountService",
]
