"""Immutable document snapshots with exact offset/position mapping."""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import unquote, urlparse

from lsprotocol.types import Position, Range
from pygls.uris import to_fs_path

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def utf16_length(text: str) -> int:
    """Length of *text* in UTF-16 code units, the unit of LSP positions."""

    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


@dataclass(frozen=True)
class DocumentSnapshot:
    """The text of a document as it was when a request arrived.

    Offsets are indices into ``text`` unless named ``utf16``; positions
    follow the protocol and count characters in UTF-16 code units.
    """

    uri: str
    text: str
    language_id: str = "plaintext"
    version: Optional[int] = None
    _line_starts: List[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        starts.extend(match.end() for match in _LINE_BREAK.finditer(self.text))
        object.__setattr__(self, "_line_starts", starts)

    @classmethod
    def from_text_document(cls, document: Any) -> "DocumentSnapshot":
        """Snapshot a pygls workspace document."""

        return cls(
            uri=document.uri,
            text=document.source,
            language_id=document.language_id or "plaintext",
            version=document.version,
        )

    @property
    def is_file(self) -> bool:
        return self.uri.startswith("file:")

    @property
    def path(self) -> str:
        """Filesystem path for ``file`` URIs, the URI path for anything else."""

        if self.is_file:
            return to_fs_path(self.uri) or ""
        return unquote(urlparse(self.uri).path)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def _line_end(self, line: int) -> int:
        """Offset where *line*'s content ends, before its line break."""

        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1]
            if self.text[end - 2:end] == "\r\n":
                return end - 2
            return end - 1
        return len(self.text)

    def position_at(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self.text))
        line = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[line]
        # An offset between "\r" and "\n" belongs to the end of the line.
        column_end = min(offset, self._line_end(line))
        return Position(line=line, character=utf16_length(self.text[line_start:column_end]))

    def offset_at(self, position: Position) -> int:
        if position.line < 0:
            return 0
        if position.line >= len(self._line_starts):
            return len(self.text)
        line_start = self._line_starts[position.line]
        line_end = self._line_end(position.line)
        units = 0
        offset = line_start
        while offset < line_end and units < position.character:
            units += 2 if ord(self.text[offset]) > 0xFFFF else 1
            offset += 1
        return offset

    def utf16_offset_at(self, position: Position) -> int:
        """Offset of *position* counted in UTF-16 code units, as JavaScript indexes strings."""

        return utf16_length(self.text[: self.offset_at(position)])

    def range_of(self, start: int, end: int) -> Range:
        return Range(start=self.position_at(start), end=self.position_at(end))

    def full_range(self) -> Range:
        return self.range_of(0, len(self.text))


__all__ = ["DocumentSnapshot", "utf16_length"]
