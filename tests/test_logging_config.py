import logging

import pytest

from config.base import LoggingConfig
from logging_config import PACKAGE_LOGGERS, configure_logging, get_logger_levels


@pytest.fixture(autouse=True)
def restore_levels():
    names = ["", *PACKAGE_LOGGERS]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_package_levels_follow_settings():
    configure_logging(LoggingConfig(
        level="INFO",
        repository_level="DEBUG",
        services_level="WARNING",
        validation_level="ERROR",
    ))

    levels = get_logger_levels()
    assert levels["repositories"] == "DEBUG"
    assert levels["services"] == "WARNING"
    assert levels["shared"] == "ERROR"


def test_levels_read_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_LEVEL_SERVICES", "debug")

    configure_logging()

    levels = get_logger_levels()
    assert levels["repositories"] == "WARNING"
    assert levels["services"] == "DEBUG"


def test_unknown_level_falls_back_to_root_level():
    configure_logging(LoggingConfig(level="INFO", repository_level="LOUD"))
    assert logging.getLogger("repositories").level == logging.INFO
