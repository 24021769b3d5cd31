"""pygls based Language Server entrypoint."""

from __future__ import annotations

from typing import Any, Optional

from lsprotocol.types import ConfigurationItem, ConfigurationParams
from pygls.server import LanguageServer

from prettier_ls import __version__
from prettier_ls.config import ServerConfig
from prettier_ls.engine.resolver import ModuleResolver
from prettier_ls.observability import LanguageClientLogHandler, get_logger
from prettier_ls.observability.logging import ROOT_LOGGER_NAME

from .edit_service import PrettierEditService
from .handlers import register_all
from .trust import TrustState
from .workspace import WorkspaceService


class PrettierLanguageServer(LanguageServer):
    """Concrete LanguageServer wiring settings, module resolution and formatting."""

    def __init__(self, config: Optional[ServerConfig] = None) -> None:
        super().__init__(name="prettier-ls", version=__version__)
        self.server_config = config or ServerConfig.from_env()
        self.has_configuration_capability = False
        self.trust = TrustState()
        self.workspace_service = WorkspaceService(self, self.trust)
        self.module_resolver = ModuleResolver(self.workspace_service, self.server_config)
        self.edit_service = PrettierEditService(self.workspace_service, self.module_resolver)
        self._client_log_handler: Optional[LanguageClientLogHandler] = None
        register_all(self)

    # ------------------------------------------------------------------
    # ClientConnection
    # ------------------------------------------------------------------
    async def fetch_settings(self, uri: str) -> Any:
        results = await self.get_configuration_async(
            ConfigurationParams(
                items=[ConfigurationItem(scope_uri=uri, section=self.server_config.settings_section)]
            )
        )
        return results[0] if results else None

    async def send_custom_request(self, method: str, params: Any) -> Any:
        return await self.lsp.send_request_async(method, params)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def apply_initialization_options(self, options: Any) -> None:
        self.server_config = self.server_config.with_initialization_options(options)
        self.module_resolver.config = self.server_config

    def attach_client_logging(self) -> None:
        """Mirror package log records to the client's output channel."""

        if self._client_log_handler is not None:
            return
        self._client_log_handler = LanguageClientLogHandler(self)
        get_logger(ROOT_LOGGER_NAME).addHandler(self._client_log_handler)


def create_server(config: Optional[ServerConfig] = None) -> PrettierLanguageServer:
    return PrettierLanguageServer(config)
