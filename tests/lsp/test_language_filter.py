from __future__ import annotations

import pytest

from prettier_ls.engine.base import SupportLanguage
from prettier_ls.lsp.language_filter import get_parser_from_language_id

from tests.lsp.conftest import SUPPORT_LANGUAGES


@pytest.mark.parametrize(
    "path,language_id,parser",
    [
        ("/w/data/settings.json", "json", "json"),
        ("/w/web/imports.importmap", "json", "json-stringify"),
        ("/w/data/settings.unknown", "json", "json-stringify"),
        ("/w/data/settings", "json", "json-stringify"),
        (None, "json", "json-stringify"),
        ("/w/db/query.js", "mongo", "babel"),
        ("/w/src/app.ts", "typescript", "typescript"),
    ],
)
def test_parser_for_language_id(path, language_id: str, parser: str) -> None:
    assert get_parser_from_language_id(SUPPORT_LANGUAGES, path, language_id) == parser


def test_extension_must_belong_to_the_same_language_id() -> None:
    # ".json" is a JSON extension, but the editor says TypeScript.
    assert get_parser_from_language_id(SUPPORT_LANGUAGES, "/w/a.json", "typescript") == "typescript"


def test_unknown_language_id_has_no_parser() -> None:
    assert get_parser_from_language_id(SUPPORT_LANGUAGES, "/w/main.rs", "rust") is None


def test_languages_without_parsers_are_skipped() -> None:
    languages = [
        SupportLanguage(name="Empty", parsers=(), extensions=(".md",), vscode_language_ids=("markdown",)),
        SupportLanguage(name="Markdown", parsers=("markdown",), extensions=(".markdown",), vscode_language_ids=("markdown",)),
    ]
    assert get_parser_from_language_id(languages, "/w/README.md", "markdown") == "markdown"
