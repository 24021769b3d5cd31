"""Editor settings resolved for a single document."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

DEFAULT_IGNORE_PATH = ".prettierignore"

# Formatting options forwarded to Prettier when no local configuration exists.
FORMATTING_OPTION_KEYS = (
    "arrowParens",
    "bracketSpacing",
    "endOfLine",
    "htmlWhitespaceSensitivity",
    "insertPragma",
    "singleAttributePerLine",
    "bracketSameLine",
    "jsxBracketSameLine",
    "jsxSingleQuote",
    "printWidth",
    "proseWrap",
    "quoteProps",
    "requirePragma",
    "semi",
    "singleQuote",
    "tabWidth",
    "trailingComma",
    "useTabs",
    "embeddedLanguageFormatting",
    "vueIndentScriptAndStyle",
)


@dataclass(frozen=True)
class PrettierSettings:
    """Effective settings for a document as reported by the client.

    Environment keys decide where Prettier and its configuration are loaded
    from.  Everything else the client sends is kept in ``raw`` and only the
    known formatting options are ever forwarded to the engine.
    """

    prettier_path: Optional[str] = None
    config_path: Optional[str] = None
    ignore_path: Optional[str] = DEFAULT_IGNORE_PATH
    document_selectors: List[Any] = field(default_factory=list)
    use_editor_config: bool = True
    with_node_modules: bool = False
    resolve_global_modules: bool = False
    require_config: bool = False
    package_manager: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_client(cls, payload: Optional[Mapping[str, Any]]) -> "PrettierSettings":
        data = dict(payload or {})
        return cls(
            prettier_path=data.get("prettierPath") or None,
            config_path=data.get("configPath") or None,
            ignore_path=data.get("ignorePath", DEFAULT_IGNORE_PATH),
            document_selectors=list(data.get("documentSelectors") or []),
            use_editor_config=bool(data.get("useEditorConfig", True)),
            with_node_modules=bool(data.get("withNodeModules", False)),
            resolve_global_modules=bool(data.get("resolveGlobalModules", False)),
            require_config=bool(data.get("requireConfig", False)),
            package_manager=data.get("packageManager") or None,
            raw=data,
        )

    def sanitized(self) -> "PrettierSettings":
        """Return a copy safe to use in an untrusted workspace.

        Anything that could load code or read files chosen by the workspace
        is reset: custom module and config paths, the ignore file name,
        document selectors and node_modules/global module lookup.
        """

        return dataclasses.replace(
            self,
            prettier_path=None,
            config_path=None,
            ignore_path=DEFAULT_IGNORE_PATH,
            document_selectors=[],
            use_editor_config=False,
            with_node_modules=False,
            resolve_global_modules=False,
        )

    def formatting_options(self) -> Dict[str, Any]:
        """Formatting options set by the client, unset keys omitted."""

        return {
            key: self.raw[key]
            for key in FORMATTING_OPTION_KEYS
            if self.raw.get(key) is not None
        }


__all__ = [
    "PrettierSettings",
    "DEFAULT_IGNORE_PATH",
    "FORMATTING_OPTION_KEYS",
]
