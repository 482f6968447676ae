"""Tests for logging configuration."""

import logging

from recipe_planner.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("recipe_planner")
    logger.handlers.clear()

    configure_logging()
    configure_logging(logging.DEBUG)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_module_loggers_share_package_handler() -> None:
    logging.getLogger("recipe_planner").handlers.clear()
    configure_logging()

    child = logging.getLogger("recipe_planner.services.meal_plans")

    assert child.getEffectiveLevel() == logging.INFO
    assert not child.handlers


def test_configure_logging_accepts_level_names() -> None:
    configure_logging("warning")

    assert logging.getLogger("recipe_planner").level == logging.WARNING
