"""
Database management commands.

Usage:
    listing-service init-db
    listing-service check-db
    listing-service drop-db --confirm
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from listing_service.config import get_settings
from listing_service.database import (
    check_database_connection,
    close_db_connection,
    create_tables,
    drop_tables,
)
from listing_service.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def init_db() -> bool:
    try:
        await create_tables()
    finally:
        await close_db_connection()
    return True


async def check_db() -> bool:
    try:
        return await check_database_connection()
    finally:
        await close_db_connection()


async def drop_db() -> bool:
    try:
        await drop_tables()
    finally:
        await close_db_connection()
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="listing-service", description="Database management")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create all tables")
    subparsers.add_parser("check-db", help="Check database connectivity")

    drop_parser = subparsers.add_parser("drop-db", help="Drop all tables")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping every table")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the listing-service console script."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    settings = get_settings()
    logger.info(f"{settings.app_name} v{settings.app_version} ({settings.environment})")

    if args.command == "drop-db" and not args.confirm:
        logger.error("Refusing to drop tables without --confirm")
        return 1

    commands = {
        "init-db": init_db,
        "check-db": check_db,
        "drop-db": drop_db,
    }

    try:
        ok = asyncio.run(commands[args.command]())
    except Exception as e:
        logger.error(f"Command {args.command} failed: {e}")
        return 1

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
