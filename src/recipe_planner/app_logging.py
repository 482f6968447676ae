"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a single stream handler to the ``recipe_planner`` logger.

    Calling it again only updates the level. ``level`` accepts a logging
    constant or a level name such as ``"DEBUG"``.
    """
    logger = logging.getLogger("recipe_planner")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
