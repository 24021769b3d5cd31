"""Unified error model for the Prettier language server."""

from __future__ import annotations

from typing import Optional


class PrettierLSError(Exception):
    """Base class for errors raised while resolving or running Prettier."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        if self.path:
            meta_parts.append(self.path)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class SettingsFetchError(PrettierLSError):
    """Raised when the client cannot provide settings for a document."""

    code = "PLS001"


class ModuleResolutionError(PrettierLSError):
    """Raised when a configured path does not contain a usable Prettier module."""

    code = "PLS002"


class ConfigResolutionError(PrettierLSError):
    """Raised when local Prettier configuration cannot be loaded."""

    code = "PLS003"


class EngineError(PrettierLSError):
    """Raised when a call into the Prettier engine fails."""

    code = "PLS004"

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        stderr: str = "",
        exit_code: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message, path=path, hint=hint)
        self.stderr = stderr
        self.exit_code = exit_code


__all__ = [
    "PrettierLSError",
    "SettingsFetchError",
    "ModuleResolutionError",
    "ConfigResolutionError",
    "EngineError",
]
