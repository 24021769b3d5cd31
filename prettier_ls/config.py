"""Process level configuration for the Prettier language server.

Values come from ``PRETTIER_LS_*`` environment variables and may be
overridden by the ``initializationOptions`` the client sends with the
``initialize`` request.

Examples:
    - PRETTIER_LS_NODE_PATH=/usr/local/bin/node
    - PRETTIER_LS_BUNDLED_PRETTIER_PATH=/opt/prettier-ls/node_modules/prettier
    - PRETTIER_LS_SETTINGS_SECTION=prettier
    - PRETTIER_LS_LOG_LEVEL=debug
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

ENV_PREFIX = "PRETTIER_LS_"

_INIT_OPTION_KEYS = {
    "nodePath": "node_path",
    "bundledPrettierPath": "bundled_prettier_path",
    "settingsSection": "settings_section",
    "logLevel": "log_level",
}


@dataclass(frozen=True)
class ServerConfig:
    """Settings that apply to the whole server process."""

    node_path: str = "node"
    bundled_prettier_path: Optional[str] = None
    settings_section: str = "prettier"
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            node_path=env.get(f"{ENV_PREFIX}NODE_PATH", defaults.node_path),
            bundled_prettier_path=env.get(f"{ENV_PREFIX}BUNDLED_PRETTIER_PATH") or None,
            settings_section=env.get(f"{ENV_PREFIX}SETTINGS_SECTION", defaults.settings_section),
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).lower(),
        )

    def with_initialization_options(self, options: Any) -> "ServerConfig":
        if not isinstance(options, Mapping):
            return self
        overrides = {
            field_name: options[key]
            for key, field_name in _INIT_OPTION_KEYS.items()
            if options.get(key)
        }
        if not overrides:
            return self
        return dataclasses.replace(self, **overrides)


__all__ = ["ServerConfig", "ENV_PREFIX"]
