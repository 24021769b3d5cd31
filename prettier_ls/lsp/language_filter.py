"""Map editor language identifiers to Prettier parsers."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from prettier_ls.engine.base import SupportLanguage

PLAINTEXT_LANGUAGE_ID = "plaintext"


def get_parser_from_language_id(
    languages: Sequence[SupportLanguage],
    path: Optional[str],
    language_id: str,
) -> Optional[str]:
    """Return the first parser of the language registered for *language_id*.

    Several Prettier languages can share an editor language id (``json``
    covers ``.json`` and ``.importmap`` for instance), so a language whose
    extensions include the file's extension is preferred.
    """

    if path:
        extension = os.path.splitext(path)[1]
        if extension:
            for language in languages:
                if language_id in language.vscode_language_ids and extension in language.extensions:
                    if language.parsers:
                        return language.parsers[0]

    for language in languages:
        if language_id in language.vscode_language_ids and language.parsers:
            return language.parsers[0]
    return None


__all__ = ["get_parser_from_language_id", "PLAINTEXT_LANGUAGE_ID"]
