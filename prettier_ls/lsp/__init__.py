"""Language Server Protocol implementation for Prettier."""

from .server import PrettierLanguageServer, create_server

__all__ = [
    "PrettierLanguageServer",
    "create_server",
]
