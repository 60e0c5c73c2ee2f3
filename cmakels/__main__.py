"""
Main entry point for the CMake Language Server.

This file is executed when running: python -m cmakels

The server communicates with editors via stdin/stdout using JSON-RPC,
so logs go to stderr or to a file.
"""
import argparse
import logging
import os

from cmakels.lsp.server import create_server


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cmakels",
        description="CMake language server backed by cmake's built-in help",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("CMAKELS_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file instead of stderr",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Start the language server on stdin/stdout."""
    args = parse_args(argv)

    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        filename=args.log_file,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    server = create_server()

    # Start the server - it will listen on stdin/stdout for LSP messages
    # from the editor client
    server.start_io()


if __name__ == "__main__":
    main()
