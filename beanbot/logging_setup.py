"""Logging for the bot process.

``configure_logging(...)`` is called once by the bot entrypoint and sends the
``beanbot`` package logs, plus aiogram's own dispatcher logs, to one stream.
Library modules only call ``get_logger(__name__)`` and log chat-related
messages with the ``chat_prefix(chat_id)`` marker.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Iterable, Optional

_PKG_LOGGER_NAME = "beanbot"
_CONFIGURED = False

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
# aiogram logs every handled update at INFO; keep those quiet unless debugging.
FRAMEWORK_LOGGERS = ("aiogram",)


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv("BEANBOT_LOG_LEVEL")
    if env_val:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
    framework_loggers: Iterable[str] = FRAMEWORK_LOGGERS,
) -> None:
    """Configure the package logger and the framework loggers exactly once.

    ``level`` accepts an ``int`` or a level name. When ``None`` the
    ``BEANBOT_LOG_LEVEL`` environment variable is used, falling back to INFO.
    Framework loggers never go below WARNING unless ``level`` is DEBUG.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    numeric = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)
    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    framework_level = numeric if numeric <= logging.DEBUG else max(numeric, logging.WARNING)
    for name in framework_loggers:
        framework_logger = logging.getLogger(name)
        framework_logger.setLevel(framework_level)
        framework_logger.addHandler(handler)
        framework_logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name; stays silent until ``configure_logging`` ran."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


def chat_prefix(chat_id: Optional[int]) -> str:
    """Log prefix identifying the conversation a message belongs to."""

    if chat_id is None:
        return ""
    return f"[C{chat_id}] "
