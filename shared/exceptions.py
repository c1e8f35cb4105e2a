"""
Custom exceptions and error handling utilities.

This module centralizes the closed set of failures produced by the entity
store (validation, repository and persistence errors) and provides
utilities for consistent error handling and reporting.
"""

from enum import Enum
from typing import Dict, Any, Optional
import logging


class ErrorKind(Enum):
    """Closed set of failure kinds reported by the entity store."""
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    INVALID_VALUE = "invalid_value"
    MISSING_FIELD = "missing_field"
    INVALID_FORMAT = "invalid_format"
    PARSE_ERROR = "parse_error"
    IO_ERROR = "io_error"


# =================== BASE EXCEPTIONS ===================

class EntityStoreError(Exception):
    """Base exception for all entity store errors."""

    kind: ErrorKind = None

    def __init__(
        self,
        message: str,
        details: Dict[str, Any] = None,
        original_exception: Exception = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_exception = original_exception

    @property
    def code(self) -> str:
        return self.kind.value if self.kind else "entity_store_error"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for boundary responses."""
        result = {
            "error": self.message,
            "code": self.code,
            "type": self.__class__.__name__
        }

        if self.details:
            result["details"] = self.details

        if self.original_exception:
            result["original_error"] = str(self.original_exception)

        return result


# =================== DATA AND VALIDATION EXCEPTIONS ===================

class DataValidationError(EntityStoreError):
    """Raised when raw input fails validation."""

    def __init__(
        self,
        message: str,
        field: str = None,
        context: str = None,
        details: Dict[str, Any] = None
    ):
        if context:
            message = f"{context}: {message}"
        super().__init__(
            message=message,
            details={
                "field": field,
                "context": context,
                **(details or {})
            }
        )
        self.field = field
        self.context = context


class MissingFieldError(DataValidationError):
    """Raised when a required field is absent or empty."""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str = None, context: str = None, message: str = None):
        super().__init__(
            message=message or f"Missing required field '{field}'",
            field=field,
            context=context
        )


class InvalidFormatError(DataValidationError):
    """Raised when a field does not parse as the expected kind."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, field: str, value: Any, expected: str, context: str = None):
        super().__init__(
            message=f"Invalid {field} format: {value!r} is not a valid {expected}",
            field=field,
            context=context,
            details={"value": repr(value), "expected": expected}
        )
        self.value = value
        self.expected = expected


class InvalidValueError(DataValidationError):
    """Raised when a value violates a range or business invariant."""

    kind = ErrorKind.INVALID_VALUE

    def __init__(self, field: str, value: Any, reason: str, context: str = None):
        super().__init__(
            message=f"Invalid {field}: {reason}",
            field=field,
            context=context,
            details={"value": str(value), "reason": reason}
        )
        self.value = value
        self.reason = reason


# =================== REPOSITORY EXCEPTIONS ===================

class RepositoryError(EntityStoreError):
    """Base class for repository errors."""
    pass


class DuplicateKeyError(RepositoryError):
    """Raised when an entity key is already present in the store."""

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, entity_type: str, key: Any, details: Dict[str, Any] = None):
        super().__init__(
            message=f"{entity_type} with key {key!r} already exists",
            details={
                "entity_type": entity_type,
                "key": key,
                **(details or {})
            }
        )
        self.entity_type = entity_type
        self.key = key


class EntityNotFoundError(RepositoryError):
    """Raised when requested entity is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_type: str, key: Any, details: Dict[str, Any] = None):
        super().__init__(
            message=f"{entity_type} not found: {key!r}",
            details={
                "entity_type": entity_type,
                "key": key,
                **(details or {})
            }
        )
        self.entity_type = entity_type
        self.key = key


# =================== PERSISTENCE EXCEPTIONS ===================

class PersistenceError(EntityStoreError):
    """Base class for snapshot and file errors."""
    pass


class SnapshotParseError(PersistenceError):
    """Raised when a snapshot resource cannot be parsed in full."""

    kind = ErrorKind.PARSE_ERROR

    def __init__(
        self,
        resource: str,
        reason: str,
        record_index: Optional[int] = None,
        cause: Optional[ErrorKind] = None,
        original_exception: Exception = None
    ):
        message = f"Cannot parse {resource}"
        if record_index is not None:
            message += f" (record {record_index})"
        message += f": {reason}"

        super().__init__(
            message=message,
            details={
                "resource": resource,
                "record_index": record_index,
                "cause": cause.value if cause else None
            },
            original_exception=original_exception
        )
        self.resource = resource
        self.reason = reason
        self.record_index = record_index
        self.cause = cause


class StorageIOError(PersistenceError):
    """Raised when a resource cannot be read or written."""

    kind = ErrorKind.IO_ERROR

    def __init__(self, resource: str, operation: str, original_exception: Exception = None):
        message = f"Cannot {operation} {resource}"
        if original_exception is not None:
            message += f": {original_exception}"
        super().__init__(
            message=message,
            details={"resource": resource, "operation": operation},
            original_exception=original_exception
        )
        self.resource = resource
        self.operation = operation


# =================== ERROR HANDLING UTILITIES ===================

def handle_exception(
    exception: EntityStoreError,
    logger: logging.Logger,
    context: Dict[str, Any] = None,
    reraise: bool = False
) -> Dict[str, Any]:
    """
    Centralized exception handling utility.

    Args:
        exception: The store error to handle
        logger: Logger instance for error reporting
        context: Additional context information
        reraise: Re-raise after logging, for callers that propagate the failure

    Returns:
        Dictionary representation of the error
    """
    error_dict = exception.to_dict()
    level = logging.ERROR if isinstance(exception, PersistenceError) else logging.WARNING
    logger.log(level, f"{exception.__class__.__name__}: {exception.message}", extra={
        "error_code": exception.code,
        "details": exception.details,
        "context": context
    })

    if context:
        error_dict["context"] = context

    if reraise:
        raise exception

    return error_dict


def create_error_response(
    exception: EntityStoreError,
    include_details: bool = True
) -> Dict[str, Any]:
    """
    Create standardized error response from exception.

    Args:
        exception: The store error to convert
        include_details: Whether to include detailed error information

    Returns:
        Standardized error response dictionary
    """
    response = {
        "success": False,
        "error": exception.message,
        "code": exception.code
    }

    if include_details and exception.details:
        response["details"] = exception.details

    return response


# =================== EXPORT ALL EXCEPTIONS ===================

__all__ = [
    "ErrorKind",

    # Base exceptions
    "EntityStoreError",

    # Validation exceptions
    "DataValidationError",
    "MissingFieldError",
    "InvalidFormatError",
    "InvalidValueError",

    # Repository exceptions
    "RepositoryError",
    "DuplicateKeyError",
    "EntityNotFoundError",

    # Persistence exceptions
    "PersistenceError",
    "SnapshotParseError",
    "StorageIOError",

    # Utility functions
    "handle_exception",
    "create_error_response",
]
