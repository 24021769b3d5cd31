"""Workspace commands exposed by the server."""

from __future__ import annotations

from typing import Any, List, Optional

from lsprotocol.types import TextEdit, WorkspaceEdit

from prettier_ls.observability import get_logger

from ..protocol import FORCE_FORMAT_COMMAND, FormatRequest
from .formatting import open_document

logger = get_logger("prettier_ls.lsp.commands")


def uri_from_arguments(arguments: Any) -> Optional[str]:
    if not arguments:
        return None
    first = arguments[0]
    if isinstance(first, str):
        return first
    if isinstance(first, dict):
        return first.get("uri")
    return getattr(first, "uri", None)


def register(server) -> None:
    edit_service = server.edit_service

    @server.command(FORCE_FORMAT_COMMAND)
    async def _force_format(ls, arguments: Any) -> List[TextEdit]:
        uri = uri_from_arguments(arguments)
        document = open_document(ls, uri) if uri else None
        if document is None:
            logger.warning("Cannot force format %s: document is not open", uri)
            return []
        edits = await edit_service.provide_edits(document, FormatRequest(force=True))
        if edits:
            ls.apply_edit(WorkspaceEdit(changes={uri: edits}), label="Format Document (Forced)")
        return edits
