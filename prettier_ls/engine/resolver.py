"""Locate Prettier installations, local configuration and ignore files."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from pygls.uris import from_fs_path

from prettier_ls.config import ServerConfig
from prettier_ls.document import DocumentSnapshot
from prettier_ls.errors import ConfigResolutionError, EngineError, ModuleResolutionError
from prettier_ls.observability import get_logger
from prettier_ls.settings import PrettierSettings
from prettier_ls.workspace_utils import (
    find_up,
    folder_path,
    get_workspace_folder,
    get_workspace_relative_path,
)

from .base import FormatterProvider, PrettierEngine, ResolvedConfig
from .node import NodePrettierEngine

if TYPE_CHECKING:  # pragma: no cover
    from prettier_ls.lsp.workspace import WorkspaceService

EngineFactory = Callable[..., PrettierEngine]

_GLOBAL_ROOT_COMMANDS: Dict[str, Tuple[Tuple[str, ...], Optional[str]]] = {
    "npm": (("root", "-g"), None),
    "pnpm": (("root", "-g"), None),
    "yarn": (("global", "dir"), "node_modules"),
}

_LOCAL_MODULE = os.path.join("node_modules", "prettier")


def read_prettier_version(module_path: str) -> str:
    """Return the version of the Prettier package at *module_path*.

    Raises :class:`ModuleResolutionError` when the directory is not a
    Prettier package.
    """

    manifest = Path(module_path) / "package.json"
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ModuleResolutionError(
            f"No readable package.json in {module_path}",
            path=module_path,
        ) from exc
    if not isinstance(data, dict) or data.get("name") != "prettier":
        raise ModuleResolutionError(
            f"{module_path} is not a Prettier package",
            path=module_path,
            hint="Point prettierPath at the directory that contains Prettier's package.json.",
        )
    return str(data.get("version", ""))


class ModuleResolver(FormatterProvider):
    """Finds the Prettier engine for a file.

    Resolution order: the ``prettierPath`` setting, a project-local
    ``node_modules/prettier`` (trusted workspaces only), the package
    manager's global modules when enabled, then the bundled Prettier.
    """

    def __init__(
        self,
        workspace: "WorkspaceService",
        config: Optional[ServerConfig] = None,
        *,
        engine_factory: EngineFactory = NodePrettierEngine,
    ) -> None:
        self.workspace = workspace
        self.config = config or ServerConfig()
        self.logger = get_logger("prettier_ls.engine.resolver")
        self._engine_factory = engine_factory
        self._engines: Dict[str, PrettierEngine] = {}
        self._global_roots: Dict[str, Optional[str]] = {}

    # ------------------------------------------------------------------
    # Engine resolution
    # ------------------------------------------------------------------
    async def get_prettier_instance(
        self,
        path: str,
        settings: Optional[PrettierSettings] = None,
    ) -> Optional[PrettierEngine]:
        try:
            engine = await self._resolve_engine(path, settings)
        except ModuleResolutionError as exc:
            self.logger.error("Failed to load Prettier: %s", exc.format())
            return None
        if engine is None:
            self.logger.error("No Prettier installation found for %s", path)
        return engine

    async def _resolve_engine(
        self,
        path: str,
        settings: Optional[PrettierSettings],
    ) -> Optional[PrettierEngine]:
        if settings is None:
            # Paths of virtual documents have no file scope to fetch settings for.
            if os.path.isabs(path):
                settings = await self.workspace.get_config(from_fs_path(path))
            else:
                settings = PrettierSettings()
        module_path, version = await self._find_module(path, settings)
        if module_path is None:
            return None

        engine = self._engines.get(module_path)
        if engine is None:
            self.logger.info("Using Prettier %s from %s", version or "(unknown version)", module_path)
            engine = self._engine_factory(module_path, node_path=self.config.node_path, version=version)
            self._engines[module_path] = engine
        return engine

    async def _find_module(
        self,
        path: str,
        settings: PrettierSettings,
    ) -> Tuple[Optional[str], Optional[str]]:
        if settings.prettier_path:
            explicit = get_workspace_relative_path(path, settings.prettier_path, self.workspace.workspace_folders)
            if explicit is None and os.path.isabs(settings.prettier_path):
                explicit = settings.prettier_path
            if explicit is None:
                raise ModuleResolutionError(
                    f"Cannot resolve prettierPath {settings.prettier_path!r} outside a workspace folder",
                    path=path,
                )
            return explicit, read_prettier_version(explicit)

        if self.workspace.is_trusted and os.path.isabs(path):
            local = find_up(_LOCAL_MODULE, os.path.dirname(path))
            if local is not None:
                try:
                    return str(local), read_prettier_version(str(local))
                except ModuleResolutionError as exc:
                    self.logger.debug("Skipping local module: %s", exc.format())

        if settings.resolve_global_modules:
            package_manager = await self._package_manager_for(path, settings)
            root = await self._global_root(package_manager)
            if root is not None:
                candidate = os.path.join(root, "prettier")
                try:
                    return candidate, read_prettier_version(candidate)
                except ModuleResolutionError as exc:
                    self.logger.debug("Skipping global module: %s", exc.format())

        bundled = self.config.bundled_prettier_path
        if bundled:
            return bundled, read_prettier_version(bundled)
        return None, None

    async def _package_manager_for(self, path: str, settings: PrettierSettings) -> str:
        if settings.package_manager:
            return settings.package_manager
        folder = get_workspace_folder(self.workspace.workspace_folders, path)
        if folder is not None:
            package_manager = await self.workspace.execute_npm_package_manager_command(folder.uri)
            if package_manager:
                return package_manager
        return "npm"

    async def _global_root(self, package_manager: str) -> Optional[str]:
        if package_manager in self._global_roots:
            return self._global_roots[package_manager]
        command = _GLOBAL_ROOT_COMMANDS.get(package_manager)
        if command is None:
            self.logger.warning("Unknown package manager %r, global modules not resolved", package_manager)
            return None
        args, suffix = command
        root: Optional[str] = None
        try:
            process = await asyncio.create_subprocess_exec(
                package_manager,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as exc:
            self.logger.warning("Could not run %s: %s", package_manager, exc)
        else:
            if process.returncode == 0 and stdout.strip():
                root = stdout.decode("utf-8").strip()
                if suffix:
                    root = os.path.join(root, suffix)
            else:
                self.logger.warning(
                    "%s %s failed: %s",
                    package_manager,
                    " ".join(args),
                    stderr.decode("utf-8", errors="replace").strip(),
                )
        self._global_roots[package_manager] = root
        return root

    # ------------------------------------------------------------------
    # Local configuration
    # ------------------------------------------------------------------
    async def get_resolved_config(
        self,
        document: DocumentSnapshot,
        settings: PrettierSettings,
    ) -> ResolvedConfig:
        if not document.is_file:
            return ResolvedConfig.missing()
        path = document.path
        # The caller reports a missing engine when it asks for one.
        try:
            engine = await self._resolve_engine(path, settings)
        except ModuleResolutionError:
            engine = None
        if engine is None:
            return ResolvedConfig.missing()

        config_path: Optional[str] = None
        if settings.config_path:
            config_path = get_workspace_relative_path(path, settings.config_path, self.workspace.workspace_folders)

        options = {"editorconfig": settings.use_editor_config}
        if config_path:
            options["config"] = config_path
        try:
            config_file = config_path or await engine.resolve_config_file(path)
            if settings.require_config and not config_file:
                self.logger.info("Require config set to true and no config present. Skipping file.")
                return ResolvedConfig.disabled()
            resolved = await engine.resolve_config(path, options)
        except EngineError as exc:
            error = ConfigResolutionError(
                f"Invalid prettier configuration file detected: {exc.message}",
                path=path,
            )
            self.logger.error(error.format())
            return ResolvedConfig.errored(error)

        if resolved is None:
            return ResolvedConfig.missing()
        return ResolvedConfig.found(resolved)

    # ------------------------------------------------------------------
    # Ignore files
    # ------------------------------------------------------------------
    async def get_resolved_ignore_path(self, path: str, ignore_path: str) -> Optional[str]:
        if not os.path.isabs(path):
            return None
        folders = self.workspace.workspace_folders
        candidate = get_workspace_relative_path(path, ignore_path, folders)
        if candidate and os.path.exists(candidate):
            return candidate
        if os.path.isabs(ignore_path):
            return None

        folder = get_workspace_folder(folders, path)
        stop = folder_path(folder) if folder is not None else None
        nearest = find_up(ignore_path, os.path.dirname(path), stop=str(stop) if stop else None)
        return str(nearest) if nearest is not None else None


__all__ = ["ModuleResolver", "read_prettier_version"]
