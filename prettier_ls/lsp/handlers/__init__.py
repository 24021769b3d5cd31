"""Handler registration helpers."""

from __future__ import annotations

from . import commands, formatting, lifecycle, trust


def register_all(server) -> None:
    lifecycle.register(server)
    trust.register(server)
    formatting.register(server)
    commands.register(server)


__all__ = ["register_all"]
