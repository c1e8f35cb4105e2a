"""
Logging configuration for the entity store.

This module provides a centralized configuration for all loggers in the
application. It allows setting different log levels for the repository,
service and validation packages and configures formatters and handlers.
"""

import logging
from typing import Dict

from config.base import LoggingConfig

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"

# Package loggers; module loggers created with getLogger(__name__) inherit from these
PACKAGE_LOGGERS = ["repositories", "services", "shared"]


def configure_logging(settings: LoggingConfig = None) -> None:
    """Configure logging for the application."""
    settings = settings or LoggingConfig.from_env()
    log_level = getattr(logging, settings.level, logging.INFO)

    # Configure root logger
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    loggers_config = {
        "repositories": settings.repository_level,
        "services": settings.services_level,
        "shared": settings.validation_level,
    }

    # Apply configuration to loggers
    for logger_name, level_name in loggers_config.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(getattr(logging, level_name, log_level))


def get_logger_levels() -> Dict[str, str]:
    """Get current log levels for all configured loggers."""
    result = {"root": logging.getLevelName(logging.getLogger().level)}

    for logger_name in PACKAGE_LOGGERS:
        logger = logging.getLogger(logger_name)
        result[logger_name] = logging.getLevelName(logger.level)

    return result
