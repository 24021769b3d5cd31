"""Initialization, workspace folder and shutdown handlers."""

from __future__ import annotations

import uuid

from lsprotocol.types import (
    INITIALIZE,
    INITIALIZED,
    SHUTDOWN,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS,
    DidChangeConfigurationParams,
    DidChangeWorkspaceFoldersParams,
    InitializedParams,
    InitializeParams,
    Registration,
    RegistrationParams,
)

from prettier_ls.observability import get_logger

logger = get_logger("prettier_ls.lsp.lifecycle")


def supports_configuration(params: InitializeParams) -> bool:
    workspace = params.capabilities.workspace
    return bool(workspace and workspace.configuration)


def register(server) -> None:
    workspace_service = server.workspace_service

    @server.feature(INITIALIZE)
    def _on_initialize(ls, params: InitializeParams) -> None:
        ls.attach_client_logging()
        ls.apply_initialization_options(params.initialization_options)
        ls.has_configuration_capability = supports_configuration(params)
        workspace_service.set_workspace_folders(params.workspace_folders)
        logger.info("onInitialize")

    @server.feature(INITIALIZED)
    async def _on_initialized(ls, params: InitializedParams) -> None:  # noqa: ARG001
        logger.info("onInitialized")
        if not ls.has_configuration_capability:
            return
        await ls.register_capability_async(
            RegistrationParams(
                registrations=[
                    Registration(id=str(uuid.uuid4()), method=WORKSPACE_DID_CHANGE_CONFIGURATION),
                ]
            )
        )

    @server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
    def _on_did_change_configuration(ls, params: DidChangeConfigurationParams) -> None:  # noqa: ARG001
        # Cached settings stay in effect for the session.
        logger.debug("Configuration changed")

    @server.feature(WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS)
    def _on_did_change_folders(ls, params: DidChangeWorkspaceFoldersParams) -> None:
        workspace_service.update_workspace_folders(params.event.added, params.event.removed)

    @server.feature(SHUTDOWN)
    def _on_shutdown(ls, params=None) -> None:  # noqa: ARG001
        workspace_service.clear()
