"""Mini README: Logging helpers shared by every budgetbadges module.

Structure:
    * configure_root_logger - one-time root logger setup with a readable format.
    * get_logger - module logger factory used as ``LOGGER = get_logger(__name__)``.

Usage:
    Ledger and storage modules log mutations, rejected entries and storage
    fallbacks through these loggers. The handler is attached exactly once;
    the application root may call ``configure_root_logger`` again with the
    configured level, which only adjusts the level.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger, adjusting only the level on repeat calls."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(_coerce_level(level))
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(_coerce_level(level if level is not None else logging.INFO))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
