"""Helpers for locating workspace folders and workspace-relative paths."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Optional

from lsprotocol.types import WorkspaceFolder
from pygls.uris import to_fs_path

_HOME_PREFIX = re.compile(r"^~(?=$|/|\\)")


def folder_path(folder: WorkspaceFolder) -> Optional[Path]:
    fs_path = to_fs_path(folder.uri)
    return Path(fs_path) if fs_path else None


def get_workspace_folder(
    workspace_folders: Iterable[WorkspaceFolder],
    fs_path: str,
) -> Optional[WorkspaceFolder]:
    """Return the deepest workspace folder that contains *fs_path*."""

    target = Path(fs_path)
    best: Optional[WorkspaceFolder] = None
    best_depth = -1
    for folder in workspace_folders:
        root = folder_path(folder)
        if root is None:
            continue
        if target != root and root not in target.parents:
            continue
        depth = len(root.parts)
        if depth > best_depth:
            best, best_depth = folder, depth
    return best


def get_workspace_relative_path(
    file_path: str,
    path_to_resolve: str,
    workspace_folders: Optional[Iterable[WorkspaceFolder]],
) -> Optional[str]:
    """Resolve a path from settings against the folder containing *file_path*.

    ``~`` expands to the home directory.  Absolute paths are returned as
    given; relative ones are joined onto the workspace folder.  ``None``
    when no workspace folder contains the file.
    """

    if path_to_resolve.startswith("~"):
        return _HOME_PREFIX.sub(lambda _: os.path.expanduser("~"), path_to_resolve)

    if not workspace_folders:
        return None
    folder = get_workspace_folder(workspace_folders, file_path)
    if folder is None:
        return None
    if os.path.isabs(path_to_resolve):
        return path_to_resolve
    root = folder_path(folder)
    return str(root / path_to_resolve) if root is not None else None


def find_up(name: str, start: str, *, stop: Optional[str] = None) -> Optional[Path]:
    """Find *name* in *start* or one of its parents, not climbing above *stop*."""

    directory = Path(start)
    stop_path = Path(stop) if stop else None
    while True:
        candidate = directory / name
        if candidate.exists():
            return candidate
        if stop_path is not None and directory == stop_path:
            return None
        if directory.parent == directory:
            return None
        directory = directory.parent


__all__ = [
    "get_workspace_folder",
    "get_workspace_relative_path",
    "find_up",
    "folder_path",
]
