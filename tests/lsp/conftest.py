from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pytest

from prettier_ls.document import DocumentSnapshot
from prettier_ls.engine.base import (
    FileInfo,
    FormatterProvider,
    PrettierEngine,
    ResolvedConfig,
    SupportInfo,
    SupportLanguage,
)
from prettier_ls.lsp.edit_service import PrettierEditService
from prettier_ls.lsp.trust import TrustState
from prettier_ls.lsp.workspace import WorkspaceService

WORKSPACE_ROOT = Path("/workspace/project")

# Trimmed from Prettier's getSupportInfo(): two languages share the "json" id.
SUPPORT_LANGUAGES = [
    SupportLanguage(
        name="JavaScript",
        parsers=("babel", "acorn"),
        extensions=(".js", ".cjs", ".mjs"),
        vscode_language_ids=("javascript", "mongo"),
    ),
    SupportLanguage(
        name="TypeScript",
        parsers=("typescript", "babel-ts"),
        extensions=(".ts", ".mts", ".cts"),
        vscode_language_ids=("typescript",),
    ),
    SupportLanguage(
        name="JSON.stringify",
        parsers=("json-stringify",),
        extensions=(".importmap",),
        vscode_language_ids=("json",),
    ),
    SupportLanguage(
        name="JSON",
        parsers=("json",),
        extensions=(".json", ".4DForm", ".4DProject"),
        vscode_language_ids=("json",),
    ),
]


class FakeConnection:
    """Stands in for the client side of the connection."""

    def __init__(
        self,
        settings: Optional[Mapping[str, Any]] = None,
        *,
        package_manager: Union[str, Exception, None] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.settings = dict(settings or {})
        self.package_manager = package_manager
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.fetch_calls: List[str] = []
        self.requests: List[Tuple[str, Any]] = []

    async def fetch_settings(self, uri: str) -> Any:
        self.fetch_calls.append(uri)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return dict(self.settings)

    async def send_custom_request(self, method: str, params: Any) -> Any:
        self.requests.append((method, params))
        if isinstance(self.package_manager, Exception):
            raise self.package_manager
        return self.package_manager


class FakeEngine(PrettierEngine):
    """Engine double; formats by applying *formatter* to the text."""

    def __init__(
        self,
        *,
        formatter: Union[Callable[[str, Mapping[str, Any]], str], Exception, None] = None,
        file_info: Optional[FileInfo] = None,
        languages: Optional[Sequence[SupportLanguage]] = None,
        module_path: str = "/bundled/node_modules/prettier",
    ) -> None:
        self.module_path = module_path
        self.formatter = formatter
        self.file_info = file_info or FileInfo(ignored=False, inferred_parser="babel")
        self.languages = list(SUPPORT_LANGUAGES if languages is None else languages)
        self.format_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.file_info_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.support_info_calls = 0

    async def format(self, text: str, options: Mapping[str, Any]) -> str:
        self.format_calls.append((text, dict(options)))
        if isinstance(self.formatter, Exception):
            raise self.formatter
        if self.formatter is None:
            return text
        return self.formatter(text, options)

    async def get_file_info(self, path: str, options: Mapping[str, Any]) -> FileInfo:
        self.file_info_calls.append((path, dict(options)))
        return self.file_info

    async def get_support_info(self) -> SupportInfo:
        self.support_info_calls += 1
        return SupportInfo(languages=self.languages)

    async def resolve_config(self, path: str, options: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return None

    async def resolve_config_file(self, path: str) -> Optional[str]:
        return None


class FakeProvider(FormatterProvider):
    def __init__(
        self,
        engine: Optional[PrettierEngine] = None,
        *,
        resolved: Optional[ResolvedConfig] = None,
        ignore_path: Optional[str] = None,
    ) -> None:
        self.engine = engine
        self.resolved = resolved or ResolvedConfig.missing()
        self.ignore_path = ignore_path
        self.ignore_lookups: List[Tuple[str, str]] = []
        self.instance_lookups: List[Tuple[str, Any]] = []

    async def get_prettier_instance(self, path: str, settings=None) -> Optional[PrettierEngine]:
        self.instance_lookups.append((path, settings))
        return self.engine

    async def get_resolved_config(self, document, settings) -> ResolvedConfig:
        return self.resolved

    async def get_resolved_ignore_path(self, path: str, ignore_path: str) -> Optional[str]:
        self.ignore_lookups.append((path, ignore_path))
        return self.ignore_path


def make_document(
    text: str,
    *,
    filename: str = "src/index.js",
    language_id: str = "javascript",
) -> DocumentSnapshot:
    return DocumentSnapshot(
        uri=(WORKSPACE_ROOT / filename).as_uri(),
        text=text,
        language_id=language_id,
        version=1,
    )


def make_edit_service(
    provider: FormatterProvider,
    settings: Optional[Mapping[str, Any]] = None,
    *,
    trusted: bool = True,
) -> PrettierEditService:
    workspace = WorkspaceService(FakeConnection(settings), TrustState(trusted))
    return PrettierEditService(workspace, provider)


@pytest.fixture()
def connection() -> FakeConnection:
    return FakeConnection({"prettierPath": "./node_modules/prettier", "tabWidth": 4})


@pytest.fixture()
def trust() -> TrustState:
    return TrustState()


@pytest.fixture()
def workspace(connection: FakeConnection, trust: TrustState) -> WorkspaceService:
    return WorkspaceService(connection, trust)


__all__ = [
    "FakeConnection",
    "FakeEngine",
    "FakeProvider",
    "SUPPORT_LANGUAGES",
    "WORKSPACE_ROOT",
    "make_document",
    "make_edit_service",
]
