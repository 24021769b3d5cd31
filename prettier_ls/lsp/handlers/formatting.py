"""Document and range formatting handlers."""

from __future__ import annotations

from typing import List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_FORMATTING,
    TEXT_DOCUMENT_RANGE_FORMATTING,
    DocumentFormattingParams,
    DocumentRangeFormattingParams,
    TextEdit,
)

from prettier_ls.document import DocumentSnapshot

from ..protocol import FormatRequest


def open_document(ls, uri: str) -> Optional[DocumentSnapshot]:
    """Snapshot *uri* if the client has it open."""

    if uri not in ls.workspace.text_documents:
        return None
    return DocumentSnapshot.from_text_document(ls.workspace.get_text_document(uri))


def register(server) -> None:
    edit_service = server.edit_service

    @server.feature(TEXT_DOCUMENT_FORMATTING)
    async def _format(ls, params: DocumentFormattingParams) -> List[TextEdit]:
        document = open_document(ls, params.text_document.uri)
        if document is None:
            return []
        return await edit_service.provide_edits(document, FormatRequest(force=False))

    @server.feature(TEXT_DOCUMENT_RANGE_FORMATTING)
    async def _format_range(ls, params: DocumentRangeFormattingParams) -> List[TextEdit]:
        document = open_document(ls, params.text_document.uri)
        if document is None:
            return []
        request = FormatRequest(
            range_start=document.utf16_offset_at(params.range.start),
            range_end=document.utf16_offset_at(params.range.end),
            force=False,
        )
        return await edit_service.provide_edits(document, request)
