"""Logging helpers shared by the server, the engine bridge and the resolver."""

from __future__ import annotations

from .logging import (
    LanguageClientLogHandler,
    configure_logging,
    get_logger,
    log_with_data,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "log_with_data",
    "LanguageClientLogHandler",
]
