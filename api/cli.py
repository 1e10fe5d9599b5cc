#!/usr/bin/env python3
"""CLI for bookstore database management tasks.

Usage:
    python -m cli <command>

Commands:
    create-tables  Create missing tables on the configured database
    check-db       Verify the configured database is reachable
"""

import argparse
import asyncio
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncEngine

from core.config import get_settings
from core.database import (
    check_db_connection,
    create_engine,
    dispose_engine,
    init_db,
)
from core.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def _with_engine(action: Callable[[AsyncEngine], Awaitable[None]]) -> None:
    engine = create_engine()
    try:
        await action(engine)
    finally:
        await dispose_engine(engine)


def cmd_create_tables() -> int:
    """Create database tables from SQLAlchemy models."""
    asyncio.run(_with_engine(init_db))
    return 0


def cmd_check_db() -> int:
    """Verify database connectivity."""
    try:
        asyncio.run(_with_engine(check_db_connection))
    except Exception:
        logger.exception("db.connectivity.failed")
        return 1
    logger.info("db.connectivity.verified")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Bookstore associations CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "create-tables",
        help="Create missing tables on the configured database",
    )
    subparsers.add_parser(
        "check-db",
        help="Verify the configured database is reachable",
    )

    args = parser.parse_args(argv)

    configure_logging(db_echo=get_settings().db_echo)

    if args.command == "create-tables":
        return cmd_create_tables()
    elif args.command == "check-db":
        return cmd_check_db()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
