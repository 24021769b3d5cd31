"""Shared protocol helpers for the Prettier language server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

# Client-implemented request returning "npm", "yarn" or "pnpm" for a folder.
EXECUTE_NPM_PACKAGE_COMMAND = "custom/executeNpmPackageCommand"
DID_CHANGE_TRUST = "workspace/didChangeTrust"
FORCE_FORMAT_COMMAND = "prettier.forceFormatDocument"


@dataclass(frozen=True)
class FormatRequest:
    """Options for one formatting request.

    ``range_start``/``range_end`` are offsets into the document text in
    UTF-16 code units, the unit Prettier's ``rangeStart``/``rangeEnd`` use.
    ``force`` formats files that are ignored or lack a required pragma.
    """

    range_start: Optional[int] = None
    range_end: Optional[int] = None
    force: bool = False

    @property
    def has_range(self) -> bool:
        return bool(self.range_start) and bool(self.range_end)


class ClientConnection(Protocol):
    """The requests the server sends to the client."""

    async def fetch_settings(self, uri: str) -> Any:
        ...

    async def send_custom_request(self, method: str, params: Any) -> Any:
        ...


__all__ = [
    "FormatRequest",
    "ClientConnection",
    "EXECUTE_NPM_PACKAGE_COMMAND",
    "DID_CHANGE_TRUST",
    "FORCE_FORMAT_COMMAND",
]
