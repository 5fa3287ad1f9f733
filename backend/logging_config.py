"""Logging setup shared by the web server and the headless CLI.

The engine logs under ``angler.*`` and the web layer under
``angler.backend``. Headless runs drop timestamps and logger names so the
encounter summary reads as plain CLI output; the web server keeps the full
format and brings uvicorn's loggers to the same level.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

ENGINE_LOGGER = "angler"
WEB_LOGGER = "angler.backend"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

LOG_LEVEL_ENV = "ANGLER_LOG_LEVEL"
DEFAULT_LEVEL = logging.INFO

WEB_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HEADLESS_FORMAT = "%(levelname)-7s %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _level_from_name(name: str) -> Optional[int]:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def resolve_log_level(level: Optional[str] = None) -> int:
    """Turn an explicit level or ``ANGLER_LOG_LEVEL`` into a logging level.

    Unknown names fall back to INFO rather than failing startup.
    """
    raw = level if level is not None else os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return DEFAULT_LEVEL
    resolved = _level_from_name(raw)
    return DEFAULT_LEVEL if resolved is None else resolved


def configure_logging(
    *,
    level: Optional[str] = None,
    headless: bool = False,
    extra_loggers: Optional[Iterable[str]] = None,
) -> logging.Logger:
    """Configure logging for one of the two run modes.

    Args:
        level: Optional explicit log level. Falls back to ``ANGLER_LOG_LEVEL``,
            then INFO.
        headless: Use the compact CLI format and leave uvicorn alone.
        extra_loggers: Additional logger names to align with the level.

    Returns:
        The engine logger (``angler``) when headless, otherwise the web
        logger (``angler.backend``).
    """
    requested = level if level is not None else os.getenv(LOG_LEVEL_ENV)
    resolved_level = resolve_log_level(requested)
    logging.basicConfig(
        level=resolved_level,
        format=HEADLESS_FORMAT if headless else WEB_FORMAT,
        datefmt=DEFAULT_DATEFMT,
    )

    names = [ENGINE_LOGGER]
    if not headless:
        names.append(WEB_LOGGER)
        names.extend(UVICORN_LOGGERS)
    names.extend(extra_loggers or ())
    for name in names:
        logging.getLogger(name).setLevel(resolved_level)

    logger = logging.getLogger(ENGINE_LOGGER if headless else WEB_LOGGER)
    if requested and _level_from_name(requested) is None:
        logger.warning("Unknown log level %r, using INFO", requested)
    logger.debug("Logging configured at %s", logging.getLevelName(resolved_level))
    return logger
