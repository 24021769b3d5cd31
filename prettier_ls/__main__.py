"""
Main entry point for the Prettier language server when run as a module.

This allows the server to be started using:
    python -m prettier_ls

or the equivalent ``prettier-ls`` console script.
"""

from .cli import main

if __name__ == '__main__':
    main()
