#!/usr/bin/env python3
"""CLI tool for opening psql sessions from local secret files.

Reads the database's connection template and credentials from the secrets
directory, resolves the connection URL and replaces this process with psql.

Usage:
    # Connect to the database described by .vault/secrets/app.db*.json
    connect-db app

    # Same, without installing the console script
    python -m connect_db app

Environment:
    CONNECT_DB_SECRETS_DIR  Secrets directory (default: .vault/secrets)
    CONNECT_DB_PSQL_BINARY  Client binary (default: psql)
    CONNECT_DB_LOG_LEVEL    Log level (default: WARNING)
"""

import argparse
import sys

import structlog

from connect_db import __version__
from connect_db.core.config import settings
from connect_db.core.errors import ConnectDbError
from connect_db.core.logging import configure_logging
from connect_db.helpers.secret_loader import load_database_secrets
from connect_db.helpers.url_resolver import resolve_connection_params
from connect_db.services.psql_launcher import PsqlLauncher

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="connect-db",
        description="Connect to a database using psql",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Connect using .vault/secrets/app.db.json and .vault/secrets/app.db-role.json
  connect-db app

  # Read secrets from another directory
  CONNECT_DB_SECRETS_DIR=/srv/secrets connect-db app
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "database_name",
        type=str,
        help="Database name (matches .vault/secrets/<database_name> files)",
    )
    return parser


def connect(database_name: str, launcher: PsqlLauncher | None = None) -> None:
    """
    Run the load, resolve and launch pipeline for a database.

    Does not return when the client is launched.

    Raises:
        ConnectDbError: If any stage fails
    """
    config, credentials = load_database_secrets(database_name)
    params = resolve_connection_params(config, credentials)

    print(f"Connection string: {params.redacted_url()}")
    print(f"Connecting to database '{params.database}' at {params.host}:{params.port}")

    (launcher or PsqlLauncher()).launch(params)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI tool.

    Args:
        argv: Command line arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Exit code (non-zero on error; success replaces the process)
    """
    args = build_parser().parse_args(argv)
    configure_logging(log_level=settings.LOG_LEVEL)

    try:
        connect(args.database_name)
    except ConnectDbError as e:
        logger.debug("connect_failed", error_type=type(e).__name__)
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
