#!/usr/bin/env python3
"""Admin account management for the tour catalog API."""

import argparse
import asyncio
import getpass
import logging
import sys

from tour_catalog.core.database import create_gateway
from tour_catalog.core.security import hash_password
from tour_catalog.models.admin import (
    ADMIN_COLLECTION,
    LEGACY_PASSWORD_FIELD,
    PASSWORD_HASH_FIELD,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def create_admin(username: str, password: str) -> None:
    """Create an admin or reset its password."""
    gateway = create_gateway()
    try:
        db = await gateway.connect()
        await gateway.ensure_indexes()
        await db[ADMIN_COLLECTION].update_one(
            {"username": username},
            {
                "$set": {"username": username, PASSWORD_HASH_FIELD: hash_password(password)},
                "$unset": {LEGACY_PASSWORD_FIELD: ""},
            },
            upsert=True,
        )
        logger.info(f"Admin '{username}' saved")
    finally:
        await gateway.close()


async def migrate_plaintext() -> int:
    """Replace legacy clear-text admin passwords with salted hashes."""
    gateway = create_gateway()
    migrated = 0
    try:
        db = await gateway.connect()
        admins = db[ADMIN_COLLECTION]
        async for admin in admins.find({LEGACY_PASSWORD_FIELD: {"$exists": True}}):
            await admins.update_one(
                {"_id": admin["_id"]},
                {
                    "$set": {PASSWORD_HASH_FIELD: hash_password(admin[LEGACY_PASSWORD_FIELD])},
                    "$unset": {LEGACY_PASSWORD_FIELD: ""},
                },
            )
            migrated += 1
            logger.info(f"Migrated admin '{admin.get('username')}'")
    finally:
        await gateway.close()

    logger.info(f"Migrated {migrated} admin account(s)")
    return migrated


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    subcommands = parser.add_subparsers(dest="command", required=True)

    create = subcommands.add_parser("create", help="Create an admin or reset its password")
    create.add_argument("username")

    subcommands.add_parser(
        "migrate-plaintext",
        help="Hash every admin password still stored in clear text",
    )

    args = parser.parse_args(argv)

    if args.command == "create":
        password = getpass.getpass(f"Password for {args.username}: ")
        if not password:
            logger.error("Password must not be empty")
            return 1
        asyncio.run(create_admin(args.username, password))
    else:
        asyncio.run(migrate_plaintext())
    return 0


if __name__ == "__main__":
    sys.exit(main())
