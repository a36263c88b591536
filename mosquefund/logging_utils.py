"""Mini README: Application-wide logging helpers for the mosque fund service.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - one-time setup of the root handler and level.

Usage:
    Modules create ``LOGGER = get_logger(__name__)`` at import time. The root
    handler is installed only once so reloading modules during development
    does not duplicate log lines. PINs and other secrets must never be passed
    to these loggers.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: int = logging.INFO) -> None:
    """Attach a single stream handler to the root logger."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        logging.getLogger().setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def level_for_environment(environment: str) -> int:
    """Map an environment label onto a logging level."""

    return logging.DEBUG if environment.strip().lower() == "development" else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
