"""Tests for logging configuration."""

import logging

from class_responses.api.app import create_app
from class_responses.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("class_responses")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_applies_level() -> None:
    logger = logging.getLogger("class_responses")
    logger.handlers.clear()

    configure_logging("debug")
    debug_level = logger.level
    configure_logging("WARNING")

    assert debug_level == logging.DEBUG
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_create_app_uses_configured_level(container) -> None:
    container.settings.log_level = "ERROR"

    create_app(container)

    assert logging.getLogger("class_responses").level == logging.ERROR
