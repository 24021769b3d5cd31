"""Prettier engine handle and formatter provider contracts.

The language server never formats anything itself.  It talks to a
:class:`PrettierEngine`, which wraps one Prettier installation, and finds
that engine through a :class:`FormatterProvider`, which also knows how to
discover local configuration and ignore files for a path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from prettier_ls.document import DocumentSnapshot
from prettier_ls.settings import PrettierSettings


@dataclass(frozen=True)
class FileInfo:
    """Result of Prettier's ``getFileInfo`` for a path."""

    ignored: bool = False
    inferred_parser: Optional[str] = None

    @classmethod
    def from_engine(cls, payload: Optional[Mapping[str, Any]]) -> "FileInfo":
        data = payload or {}
        return cls(
            ignored=bool(data.get("ignored", False)),
            inferred_parser=data.get("inferredParser") or None,
        )


@dataclass(frozen=True)
class SupportLanguage:
    """One entry of the language table from Prettier's ``getSupportInfo``."""

    name: str
    parsers: Sequence[str] = ()
    extensions: Sequence[str] = ()
    vscode_language_ids: Sequence[str] = ()

    @classmethod
    def from_engine(cls, payload: Mapping[str, Any]) -> "SupportLanguage":
        return cls(
            name=str(payload.get("name", "")),
            parsers=tuple(payload.get("parsers") or ()),
            extensions=tuple(payload.get("extensions") or ()),
            vscode_language_ids=tuple(payload.get("vscodeLanguageIds") or ()),
        )


@dataclass(frozen=True)
class SupportInfo:
    languages: List[SupportLanguage] = field(default_factory=list)

    @classmethod
    def from_engine(cls, payload: Optional[Mapping[str, Any]]) -> "SupportInfo":
        languages = (payload or {}).get("languages") or []
        return cls(languages=[SupportLanguage.from_engine(item) for item in languages if item])


class ConfigStatus(Enum):
    """Outcome of looking for local configuration near a document."""

    FOUND = "found"
    MISSING = "missing"
    DISABLED = "disabled"
    ERRORED = "errored"


@dataclass(frozen=True)
class ResolvedConfig:
    """Tagged result of local configuration discovery.

    ``FOUND`` carries the discovered options, ``MISSING`` means nothing was
    found and workspace settings apply, ``DISABLED`` means formatting is off
    for this path and ``ERRORED`` means discovery failed.
    """

    status: ConfigStatus
    options: Optional[Dict[str, Any]] = None
    error: Optional[BaseException] = None

    @classmethod
    def found(cls, options: Mapping[str, Any]) -> "ResolvedConfig":
        return cls(ConfigStatus.FOUND, options=dict(options))

    @classmethod
    def missing(cls) -> "ResolvedConfig":
        return cls(ConfigStatus.MISSING)

    @classmethod
    def disabled(cls) -> "ResolvedConfig":
        return cls(ConfigStatus.DISABLED)

    @classmethod
    def errored(cls, error: BaseException) -> "ResolvedConfig":
        return cls(ConfigStatus.ERRORED, error=error)

    @property
    def allows_formatting(self) -> bool:
        return self.status in (ConfigStatus.FOUND, ConfigStatus.MISSING)


class PrettierEngine(ABC):
    """A loaded Prettier installation."""

    module_path: str

    @abstractmethod
    async def format(self, text: str, options: Mapping[str, Any]) -> str:
        """Format *text* with *options* and return the new text."""

    @abstractmethod
    async def get_file_info(self, path: str, options: Mapping[str, Any]) -> FileInfo:
        """Report whether *path* is ignored and which parser Prettier would use."""

    @abstractmethod
    async def get_support_info(self) -> SupportInfo:
        """Return the languages and parsers this Prettier supports."""

    @abstractmethod
    async def resolve_config(self, path: str, options: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Return options from local configuration for *path*, ``None`` when absent."""

    @abstractmethod
    async def resolve_config_file(self, path: str) -> Optional[str]:
        """Return the configuration file governing *path*, if any."""


class FormatterProvider(ABC):
    """Resolves engines, local configuration and ignore files for documents."""

    @abstractmethod
    async def get_prettier_instance(
        self,
        path: str,
        settings: Optional[PrettierSettings] = None,
    ) -> Optional[PrettierEngine]:
        """Return the engine to use for *path*, ``None`` when none can be loaded.

        *settings* are the settings already resolved for the document;
        they are fetched for *path* when omitted.
        """

    @abstractmethod
    async def get_resolved_config(
        self,
        document: DocumentSnapshot,
        settings: PrettierSettings,
    ) -> ResolvedConfig:
        """Discover local configuration for *document*."""

    @abstractmethod
    async def get_resolved_ignore_path(self, path: str, ignore_path: str) -> Optional[str]:
        """Locate the ignore file that applies to *path*."""


__all__ = [
    "FileInfo",
    "SupportLanguage",
    "SupportInfo",
    "ConfigStatus",
    "ResolvedConfig",
    "PrettierEngine",
    "FormatterProvider",
]
