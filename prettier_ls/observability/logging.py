"""Centralised logging helpers for the Prettier language server."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from lsprotocol.types import MessageType

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

ROOT_LOGGER_NAME = "prettier_ls"

LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_MESSAGE_TYPES = (
    (logging.ERROR, MessageType.Error),
    (logging.WARNING, MessageType.Warning),
    (logging.INFO, MessageType.Info),
)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Set the package log level and attach a stderr handler once.

    stdout carries the protocol when running over stdio, so console output
    always goes to stderr.
    """

    numeric_level = LEVEL_MAP.get((level or "info").lower(), logging.INFO)
    logger = get_logger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)
    return logger


def render_data(data: Any) -> str:
    """Render structured log data the way it appears in the output channel."""

    try:
        return json.dumps(data, indent=2, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return repr(data)


def log_with_data(logger: logging.Logger, level: int, message: str, data: Any = None) -> None:
    """Log *message*, followed by *data* rendered as JSON when given."""

    if data is None:
        logger.log(level, message)
        return
    if not logger.isEnabledFor(level):
        return
    logger.log(level, "%s %s", message, render_data(data))


class LanguageClientLogHandler(logging.Handler):
    """Forward log records to the client's log channel (``window/logMessage``)."""

    def __init__(self, server: Any, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.server = server
        self.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self.server.show_message_log(message, message_type_for(record.levelno))
        except Exception:  # pragma: no cover - the transport may already be closed
            self.handleError(record)


def message_type_for(levelno: int) -> MessageType:
    for threshold, message_type in _MESSAGE_TYPES:
        if levelno >= threshold:
            return message_type
    return MessageType.Log


__all__ = [
    "get_logger",
    "configure_logging",
    "log_with_data",
    "render_data",
    "LanguageClientLogHandler",
    "message_type_for",
    "ROOT_LOGGER_NAME",
]
