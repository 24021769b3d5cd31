"""Per-document settings and workspace state for the Prettier language server."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Dict, Iterable, List, Optional, Sequence

from lsprotocol.types import WorkspaceFolder
from pygls.uris import to_fs_path

from prettier_ls.errors import SettingsFetchError
from prettier_ls.observability import get_logger
from prettier_ls.settings import PrettierSettings

from .protocol import EXECUTE_NPM_PACKAGE_COMMAND, ClientConnection
from .trust import TrustState


def settings_key(uri: str) -> str:
    """Cache key for *uri*: the filesystem path for ``file`` URIs.

    Clients and ``from_fs_path`` may percent-encode the same file
    differently (``+``, drive letters); the path is stable.
    """

    if uri.startswith("file:"):
        return to_fs_path(uri) or uri
    return uri


class WorkspaceService:
    """Resolves and caches the effective settings of each document.

    One resolution is kept per document for the whole session, so
    concurrent requests for the same document share a single settings
    fetch.  Settings fetched while the workspace is untrusted are
    sanitized before they are cached.
    """

    def __init__(
        self,
        connection: ClientConnection,
        trust: Optional[TrustState] = None,
        workspace_folders: Optional[Iterable[WorkspaceFolder]] = None,
    ) -> None:
        self.logger = get_logger("prettier_ls.lsp.workspace")
        self.connection = connection
        self.trust = trust or TrustState()
        self._workspace_folders: List[WorkspaceFolder] = list(workspace_folders or [])
        self._settings: Dict[str, "asyncio.Task[PrettierSettings]"] = {}

    @property
    def is_trusted(self) -> bool:
        return self.trust.is_trusted

    # ------------------------------------------------------------------
    # Workspace folders
    # ------------------------------------------------------------------
    @property
    def workspace_folders(self) -> List[WorkspaceFolder]:
        return list(self._workspace_folders)

    def set_workspace_folders(self, folders: Optional[Iterable[WorkspaceFolder]]) -> None:
        self._workspace_folders = list(folders or [])

    def update_workspace_folders(
        self,
        added: Sequence[WorkspaceFolder],
        removed: Sequence[WorkspaceFolder],
    ) -> None:
        removed_uris = {folder.uri for folder in removed}
        folders = [folder for folder in self._workspace_folders if folder.uri not in removed_uris]
        known = {folder.uri for folder in folders}
        folders.extend(folder for folder in added if folder.uri not in known)
        self._workspace_folders = folders

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def pending_config(self, uri: str) -> "asyncio.Task[PrettierSettings]":
        """Return the shared resolution for *uri*, starting it if needed."""

        key = settings_key(uri)
        task = self._settings.get(key)
        if task is None:
            task = asyncio.ensure_future(self._resolve_config(uri))
            task.add_done_callback(partial(self._forget_failed, key))
            self._settings[key] = task
        return task

    async def get_config(self, uri: str) -> PrettierSettings:
        # Shielded so a cancelled request does not cancel the shared fetch.
        return await asyncio.shield(self.pending_config(uri))

    async def _resolve_config(self, uri: str) -> PrettierSettings:
        try:
            payload = await self.connection.fetch_settings(uri)
        except Exception as exc:
            raise SettingsFetchError(f"Could not fetch settings: {exc}", path=uri) from exc
        settings = PrettierSettings.from_client(payload)
        if self.is_trusted:
            return settings
        return settings.sanitized()

    def _forget_failed(self, key: str, task: "asyncio.Task[PrettierSettings]") -> None:
        if not task.cancelled() and task.exception() is None:
            return
        if self._settings.get(key) is task:
            del self._settings[key]

    def clear(self) -> None:
        """Drop every cached resolution, used when the session ends."""

        self._settings.clear()

    # ------------------------------------------------------------------
    # Client commands
    # ------------------------------------------------------------------
    async def execute_npm_package_manager_command(self, workspace_folder_uri: str) -> Optional[str]:
        """Ask the client which package manager a workspace folder uses."""

        try:
            result = await self.connection.send_custom_request(
                EXECUTE_NPM_PACKAGE_COMMAND,
                {"workspaceFolderUri": workspace_folder_uri},
            )
        except Exception as exc:
            self.logger.debug("Package manager lookup failed for %s: %s", workspace_folder_uri, exc)
            return None
        if isinstance(result, str) and result:
            return result
        return None


__all__ = ["WorkspaceService", "settings_key"]
