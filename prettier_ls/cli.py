"""
Prettier language server command line entry point.

Editor integrations start the server over stdio:

    prettier-ls --stdio

A TCP listener is available for debugging:

    prettier-ls --tcp --host 127.0.0.1 --port 2087
"""

import argparse
import os
import sys
from typing import Optional

from prettier_ls import __version__
from prettier_ls.config import ENV_PREFIX, ServerConfig
from prettier_ls.observability import configure_logging, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='prettier-ls',
        description='Language server that formats documents with Prettier',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    transport = parser.add_mutually_exclusive_group()
    transport.add_argument('--stdio', action='store_true', help='Communicate over stdin/stdout (default)')
    transport.add_argument('--tcp', action='store_true', help='Listen for a client on a TCP socket')
    parser.add_argument('--host', default='127.0.0.1', help='TCP host (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=2087, help='TCP port (default: 2087)')
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'warning', 'error'],
        default=None,
        help=f'Log level (default: ${ENV_PREFIX}LOG_LEVEL or info)',
    )
    parser.add_argument('--node-path', default=None, help='Node.js executable used to run Prettier')
    return parser


def main(argv: Optional[list] = None) -> None:
    """Parse arguments, configure logging and run the server until exit."""
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    config = ServerConfig.from_env()
    if args.log_level:
        config = config.with_initialization_options({'logLevel': args.log_level})
    if args.node_path:
        config = config.with_initialization_options({'nodePath': args.node_path})
    configure_logging(config.log_level)

    # Imported late so `--help` does not pay for pygls.
    from prettier_ls.lsp.server import create_server

    server = create_server(config)
    logger = get_logger('prettier_ls.cli')
    if args.tcp:
        logger.info('Starting Prettier LSP on %s:%s (pid=%s)', args.host, args.port, os.getpid())
        server.start_tcp(args.host, args.port)
    else:
        logger.info('Starting Prettier LSP (pid=%s)', os.getpid())
        server.start_io()


__all__ = ['main', 'build_parser']
