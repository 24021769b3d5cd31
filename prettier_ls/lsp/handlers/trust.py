"""Workspace trust notification handler."""

from __future__ import annotations

from typing import Any

from ..protocol import DID_CHANGE_TRUST


def is_trusted_from(params: Any) -> bool:
    if isinstance(params, dict):
        return bool(params.get("isTrusted", False))
    return bool(getattr(params, "isTrusted", False))


def register(server) -> None:
    trust = server.trust

    @server.feature(DID_CHANGE_TRUST)
    def _did_change_trust(ls, params: Any) -> None:
        trust.update(is_trusted_from(params))
