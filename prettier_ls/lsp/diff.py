"""Reduce a whole-document replacement to the smallest single edit."""

from __future__ import annotations

from dataclasses import dataclass

from lsprotocol.types import TextEdit

from prettier_ls.document import DocumentSnapshot


@dataclass(frozen=True)
class SpanEdit:
    """Replace ``original[start:end]`` with ``text``."""

    start: int
    end: int
    text: str

    @property
    def is_empty(self) -> bool:
        return self.start == self.end and not self.text

    def apply(self, original: str) -> str:
        return original[: self.start] + self.text + original[self.end :]


def minimal_edit(original: str, candidate: str) -> SpanEdit:
    """Return the edit that turns *original* into *candidate*.

    The common prefix and the common suffix of what remains are left
    untouched; prefix and suffix never overlap.  Identical inputs give an
    empty edit at the end of the text.
    """

    limit = min(len(original), len(candidate))
    prefix = 0
    while prefix < limit and original[prefix] == candidate[prefix]:
        prefix += 1

    suffix = 0
    while (
        prefix + suffix < limit
        and original[len(original) - suffix - 1] == candidate[len(candidate) - suffix - 1]
    ):
        suffix += 1

    return SpanEdit(
        start=prefix,
        end=len(original) - suffix,
        text=candidate[prefix : len(candidate) - suffix],
    )


def minimal_text_edit(document: DocumentSnapshot, candidate: str) -> TextEdit:
    """:func:`minimal_edit` expressed as a protocol ``TextEdit`` on *document*."""

    original = document.text
    edit = minimal_edit(original, candidate)
    start, end, text = edit.start, edit.end, edit.text
    # A position cannot point between "\r" and "\n", so widen over the pair.
    if 0 < start < len(original) and original[start - 1 : start + 1] == "\r\n":
        start -= 1
        text = "\r" + text
    if 0 < end < len(original) and original[end - 1 : end + 1] == "\r\n":
        end += 1
        text = text + "\n"
    return TextEdit(range=document.range_of(start, end), new_text=text)


__all__ = ["SpanEdit", "minimal_edit", "minimal_text_edit"]
