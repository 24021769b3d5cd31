"""Prettier engine handles and the resolver that finds them."""

from __future__ import annotations

from .base import (
    ConfigStatus,
    FileInfo,
    FormatterProvider,
    PrettierEngine,
    ResolvedConfig,
    SupportInfo,
    SupportLanguage,
)
from .node import NodePrettierEngine
from .resolver import ModuleResolver

__all__ = [
    "ConfigStatus",
    "FileInfo",
    "FormatterProvider",
    "ModuleResolver",
    "NodePrettierEngine",
    "PrettierEngine",
    "ResolvedConfig",
    "SupportInfo",
    "SupportLanguage",
]
