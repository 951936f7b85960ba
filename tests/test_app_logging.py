"""Tests for logging configuration."""

import logging
from collections.abc import Iterator

import pytest

from love_days.api.app import create_app
from love_days.app_logging import LOG_FORMAT, configure_logging
from love_days.config import Settings
from love_days.containers import build_container


@pytest.fixture
def app_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("love_days")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_configure_logging_installs_one_handler(app_logger: logging.Logger) -> None:
    configure_logging()
    configure_logging()

    assert len(app_logger.handlers) == 1
    assert app_logger.handlers[0].formatter._fmt == LOG_FORMAT
    assert app_logger.propagate is False


def test_repeated_configuration_updates_level(app_logger: logging.Logger) -> None:
    configure_logging("info")
    configure_logging("debug")

    assert app_logger.level == logging.DEBUG
    assert len(app_logger.handlers) == 1


def test_create_app_applies_configured_level(
    app_logger: logging.Logger, settings: Settings
) -> None:
    create_app(build_container(settings.model_copy(update={"log_level": "WARNING"})))

    assert app_logger.level == logging.WARNING
