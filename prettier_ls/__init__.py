"""
Prettier language server.

This package exposes the Prettier formatter to editors over the Language
Server Protocol.  A client asks for a document (or a range of it) to be
formatted; the server works out which Prettier installation and which
options apply to that document, runs Prettier and answers with the
smallest text edit that turns the current text into the formatted one.

The code is organised into several modules:

* ``settings`` – editor settings for a document, including the
  sanitisation applied when the workspace is not trusted.
* ``engine`` – the Prettier capability: the engine handle, the provider
  contract and the module resolver that locates a Prettier install.
* ``lsp`` – the pygls based server, the per-document settings cache and
  the formatting pipeline that turns Prettier output into edits.
* ``cli`` – the ``prettier-ls`` command used by editor integrations.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
