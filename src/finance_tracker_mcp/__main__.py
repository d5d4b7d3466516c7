"""
CLI entry point for the finance tracker MCP server.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from finance_tracker_mcp.server import run_server

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the server."""
    parser = argparse.ArgumentParser(
        prog="finance-tracker-mcp",
        description="Finance Tracker MCP Server - Track income, expenses and budgets through MCP",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        metavar="PATH",
        help="JSON snapshot with categories, transactions and budgets to load at startup",
    )
    parser.add_argument(
        "--no-default-categories",
        dest="seed_categories",
        action="store_false",
        help="Start without the default category set",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every store mutation (DEBUG level)",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        asyncio.run(
            run_server(data_file=args.data_file, seed_categories=args.seed_categories)
        )
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
