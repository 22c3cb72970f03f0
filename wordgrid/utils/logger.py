"""Logging utilities tailored for puzzle generation."""

from __future__ import annotations

import logging
import os
from typing import Optional


ROOT_LOGGER_NAME = "wordgrid"
LEVEL_ENV_VAR = "WORDGRID_LOG_LEVEL"


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "")
    level = logging.getLevelName(name.upper()) if name else default
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """Attach a one-line handler to the ``wordgrid`` logger namespace.

    Only the package's own loggers are configured; the root logger and any
    handlers installed by a host application are left alone. Without an
    explicit ``level`` the ``WORDGRID_LOG_LEVEL`` environment variable is
    used, falling back to INFO.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level if level is not None else _level_from_env())
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``wordgrid`` namespace, configuring it once."""

    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_logging()
    name = name or ROOT_LOGGER_NAME
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
