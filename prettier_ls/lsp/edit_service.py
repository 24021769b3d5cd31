"""Formatting pipeline: settings, engine, parser and options to a text edit."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from lsprotocol.types import TextEdit

from prettier_ls.document import DocumentSnapshot
from prettier_ls.engine.base import ConfigStatus, FileInfo, FormatterProvider, PrettierEngine, ResolvedConfig
from prettier_ls.errors import EngineError, SettingsFetchError
from prettier_ls.observability import get_logger, log_with_data
from prettier_ls.settings import PrettierSettings

from .diff import minimal_text_edit
from .language_filter import PLAINTEXT_LANGUAGE_ID, get_parser_from_language_id
from .protocol import FormatRequest
from .workspace import WorkspaceService


class PrettierEditService:
    """Turns a formatting request for a document into text edits.

    Every step that cannot continue ends the request with no edit and a log
    entry; nothing here raises to the protocol layer.
    """

    def __init__(self, workspace: WorkspaceService, provider: FormatterProvider) -> None:
        self.workspace = workspace
        self.provider = provider
        self.logger = get_logger("prettier_ls.lsp.edit")

    async def provide_edits(self, document: DocumentSnapshot, request: FormatRequest) -> List[TextEdit]:
        result = await self.format(document.text, document, request)
        if result is None:
            return []
        edit = minimal_text_edit(document, result)
        if edit.new_text == "" and edit.range.start == edit.range.end:
            return []
        return [edit]

    async def format(
        self,
        text: str,
        document: DocumentSnapshot,
        request: FormatRequest,
    ) -> Optional[str]:
        """Run Prettier for *document*; ``None`` when formatting must not happen."""

        self.logger.info("Formatting %s", document.uri)
        path = document.path

        try:
            settings = await self.workspace.get_config(document.uri)
        except SettingsFetchError as exc:
            self.logger.error(exc.format())
            return None

        resolved = await self.provider.get_resolved_config(document, settings)
        if not resolved.allows_formatting:
            self.logger.info("Local configuration is %s, skipping.", resolved.status.value)
            return None

        engine = await self.provider.get_prettier_instance(path, settings)
        if engine is None:
            self.logger.error("Prettier could not be loaded. See previous logs for more information.")
            return None

        resolved_ignore_path: Optional[str] = None
        if settings.ignore_path and document.is_file:
            resolved_ignore_path = await self.provider.get_resolved_ignore_path(path, settings.ignore_path)
            if resolved_ignore_path:
                self.logger.info("Using ignore file (if present) at %s", resolved_ignore_path)

        file_info: Optional[FileInfo] = None
        if document.is_file:
            file_info_options: Dict[str, Any] = {
                "resolveConfig": True,
                "withNodeModules": settings.with_node_modules,
            }
            if resolved_ignore_path:
                file_info_options["ignorePath"] = resolved_ignore_path
            try:
                file_info = await engine.get_file_info(path, file_info_options)
            except EngineError as exc:
                self.logger.error("Failed to read file info. %s", exc.format())
                return None
            log_with_data(
                self.logger,
                logging.INFO,
                "File Info:",
                {"ignored": file_info.ignored, "inferredParser": file_info.inferred_parser},
            )

        if not request.force and file_info is not None and file_info.ignored:
            self.logger.info("File is ignored, skipping.")
            return None

        parser = await self._resolve_parser(engine, document, file_info)
        if not parser:
            self.logger.error(
                "Failed to resolve a parser, skipping file. "
                "If you registered a custom file extension, be sure to configure the parser."
            )
            return None

        options = self.get_prettier_options(path, parser, settings, resolved, request)
        log_with_data(self.logger, logging.INFO, "Prettier Options:", options)

        try:
            return await engine.format(text, options)
        except Exception as exc:
            self.logger.error("Error formatting document. %s", exc)
            return text

    async def _resolve_parser(
        self,
        engine: PrettierEngine,
        document: DocumentSnapshot,
        file_info: Optional[FileInfo],
    ) -> Optional[str]:
        if file_info is not None and file_info.inferred_parser:
            return file_info.inferred_parser
        # Plain text never has a formatter; a custom extension without a
        # configured parser is the usual cause.
        if document.language_id == PLAINTEXT_LANGUAGE_ID:
            return None
        self.logger.warning("Parser not inferred, trying the editor language.")
        try:
            support_info = await engine.get_support_info()
        except EngineError as exc:
            self.logger.error("Failed to read supported languages. %s", exc.format())
            return None
        return get_parser_from_language_id(support_info.languages, document.path, document.language_id)

    def get_prettier_options(
        self,
        file_name: str,
        parser: str,
        settings: PrettierSettings,
        resolved: ResolvedConfig,
        request: FormatRequest,
    ) -> Dict[str, Any]:
        """Merge options, lowest precedence first.

        Editor settings (only without local configuration), then file path
        and parser, then range bounds, then local configuration.
        """

        fallback_to_settings = resolved.status is not ConfigStatus.FOUND
        if fallback_to_settings:
            self.logger.info(
                "No local configuration (i.e. .prettierrc or .editorconfig) detected, "
                "falling back to editor settings"
            )
        else:
            self.logger.info(
                "Detected local configuration (i.e. .prettierrc or .editorconfig), "
                "editor settings will not be used"
            )

        options: Dict[str, Any] = {}
        if fallback_to_settings:
            options.update(settings.formatting_options())
        options["filepath"] = file_name
        options["parser"] = parser
        if request.has_range:
            options["rangeStart"] = request.range_start
            options["rangeEnd"] = request.range_end
        if not fallback_to_settings and resolved.options:
            options.update(resolved.options)

        if request.force and options.get("requirePragma") is True:
            options["requirePragma"] = False
        return options


__all__ = ["PrettierEditService"]
