"""
Base configuration class with all application settings.

This module centralizes every setting the entity store reads from the
environment: where snapshots live, how they are encoded, how delimited
input is split and log levels.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from shared.constants import (
    DEFAULT_ACCOUNTS_FILE,
    DEFAULT_CSV_DELIMITER,
    DEFAULT_DATA_DIR,
    DEFAULT_ENCODING,
    DEFAULT_INVENTORY_FILE,
    DEFAULT_JSON_INDENT,
    DEFAULT_REPORT_FILE,
    DEFAULT_STUDENTS_FILE,
    DEFAULT_TRANSACTIONS_FILE,
    EnvKeys,
)


def _get_bool(name: str, default: bool) -> bool:
    """Parse boolean environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    v = val.strip().lower()
    return v in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    """Parse integer environment variable."""
    try:
        return int(os.getenv(name, str(default)))
    except (ValueError, TypeError):
        return default


def _get_optional_int(name: str, default: Optional[int]) -> Optional[int]:
    """Parse integer environment variable where 'none' disables the setting."""
    val = os.getenv(name)
    if val is None:
        return default
    if val.strip().lower() in ("", "none", "null"):
        return None
    return _get_int(name, default)


@dataclass
class StorageConfig:
    """Snapshot and report file locations."""
    data_dir: str = DEFAULT_DATA_DIR
    inventory_file: str = DEFAULT_INVENTORY_FILE
    accounts_file: str = DEFAULT_ACCOUNTS_FILE
    transactions_file: str = DEFAULT_TRANSACTIONS_FILE
    students_file: str = DEFAULT_STUDENTS_FILE
    report_file: str = DEFAULT_REPORT_FILE
    encoding: str = DEFAULT_ENCODING
    json_indent: Optional[int] = DEFAULT_JSON_INDENT

    @classmethod
    def from_env(cls) -> 'StorageConfig':
        return cls(
            data_dir=os.getenv(EnvKeys.DATA_DIR, DEFAULT_DATA_DIR),
            inventory_file=os.getenv(EnvKeys.INVENTORY_FILE, DEFAULT_INVENTORY_FILE),
            accounts_file=os.getenv(EnvKeys.ACCOUNTS_FILE, DEFAULT_ACCOUNTS_FILE),
            transactions_file=os.getenv(EnvKeys.TRANSACTIONS_FILE, DEFAULT_TRANSACTIONS_FILE),
            students_file=os.getenv(EnvKeys.STUDENTS_FILE, DEFAULT_STUDENTS_FILE),
            report_file=os.getenv(EnvKeys.REPORT_FILE, DEFAULT_REPORT_FILE),
            encoding=os.getenv(EnvKeys.ENCODING, DEFAULT_ENCODING).strip(),
            json_indent=_get_optional_int(EnvKeys.JSON_INDENT, DEFAULT_JSON_INDENT),
        )

    def path_for(self, file_name: str) -> Path:
        """Resolve a file name against the data directory."""
        return Path(self.data_dir) / file_name


@dataclass
class ValidationConfig:
    """Parsing options for raw delimited input."""
    csv_delimiter: str = DEFAULT_CSV_DELIMITER

    @classmethod
    def from_env(cls) -> 'ValidationConfig':
        return cls(
            csv_delimiter=os.getenv(EnvKeys.CSV_DELIMITER, DEFAULT_CSV_DELIMITER),
        )


@dataclass
class LoggingConfig:
    """Log levels for the root logger and each package."""
    level: str = "INFO"
    repository_level: str = "INFO"
    services_level: str = "INFO"
    validation_level: str = "INFO"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        level = os.getenv(EnvKeys.LOG_LEVEL, "INFO").upper()
        return cls(
            level=level,
            repository_level=os.getenv(EnvKeys.LOG_LEVEL_REPOSITORY, level).upper(),
            services_level=os.getenv(EnvKeys.LOG_LEVEL_SERVICES, level).upper(),
            validation_level=os.getenv(EnvKeys.LOG_LEVEL_VALIDATION, level).upper(),
        )


class BaseConfig:
    """
    Base configuration class that consolidates all application settings.

    Subclasses adjust the defaults for one environment in
    ``_setup_environment``.
    """

    def __init__(self):
        # Core app configuration
        self.app_name: str = "Entity Store"
        self.app_version: str = "1.0.0"
        self.debug: bool = _get_bool(EnvKeys.DEBUG, False)
        self.environment: str = os.getenv(EnvKeys.ENVIRONMENT, "development")

        # Configuration groups
        self.storage = StorageConfig.from_env()
        self.validation = ValidationConfig.from_env()
        self.logging = LoggingConfig.from_env()

        # Initialize environment-specific settings
        self._setup_environment()

    def _setup_environment(self):
        """Setup environment-specific configuration. Override in subclasses."""
        pass

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() in ("development", "dev")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() in ("testing", "test")

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if len(self.validation.csv_delimiter) != 1:
            errors.append(f"CSV delimiter must be one character: {self.validation.csv_delimiter!r}")

        if self.storage.json_indent is not None and self.storage.json_indent < 0:
            errors.append(f"JSON indent cannot be negative: {self.storage.json_indent}")

        if not self.storage.data_dir.strip():
            errors.append("Data directory is not configured")

        return errors
