"""
Centralized configuration management for the entity store.

This package provides environment-specific configuration classes that
consolidate all application settings in one place.

Usage:
    from config import get_config

    config = get_config()  # Auto-detects environment
    # or
    config = get_config('testing')  # Explicit environment

    print(config.storage.data_dir)
    print(config.validation.csv_delimiter)
"""

from config.base import BaseConfig
from config.development import DevelopmentConfig
from config.production import ProductionConfig
from config.testing import TestingConfig

import os

from dotenv import find_dotenv, load_dotenv

from shared.constants import EnvKeys


def get_config(environment: str = None) -> BaseConfig:
    """
    Get configuration instance based on environment.

    Values from a .env file in the working directory (or a parent) are
    loaded first; variables already set in the
    process environment win.

    Args:
        environment: Environment name ('development', 'production', 'testing')
                    If None, auto-detects from ENTITY_STORE_ENV environment variable

    Returns:
        Configuration instance for the specified environment
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    if environment is None:
        environment = os.getenv(EnvKeys.ENVIRONMENT, 'development').lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig,
        'dev': DevelopmentConfig,
        'prod': ProductionConfig,
        'test': TestingConfig,
    }

    config_class = config_map.get(environment, DevelopmentConfig)
    return config_class()


__all__ = [
    'BaseConfig',
    'DevelopmentConfig',
    'ProductionConfig',
    'TestingConfig',
    'get_config',
]
