"""Workspace trust for the current session."""

from __future__ import annotations

from prettier_ls.observability import get_logger


class TrustState:
    """Whether the client has marked the workspace as trusted.

    Sessions start untrusted.  :meth:`update` is the only way to change the
    value and is called once per ``workspace/didChangeTrust`` notification.
    """

    def __init__(self, trusted: bool = False) -> None:
        self._trusted = trusted
        self.logger = get_logger("prettier_ls.lsp.trust")

    @property
    def is_trusted(self) -> bool:
        return self._trusted

    def update(self, is_trusted: bool) -> None:
        self.logger.info("Workspace trust changed: %s", "trusted" if is_trusted else "untrusted")
        self._trusted = bool(is_trusted)

    def __repr__(self) -> str:
        return f"TrustState(trusted={self._trusted})"


__all__ = ["TrustState"]
