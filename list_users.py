#!/usr/bin/env python3
"""
Print every user in the CARDZEN SQLite database.

Only ``id``, ``username`` and ``email`` are shown; password hashes are
never printed.

Usage:
    python list_users.py --db ./cardzen.db
"""

import argparse
import asyncio
import os
import sys

from cardzen_api.app.core.config import settings
from cardzen_api.app.core.db import Database
from cardzen_api.app.services.user_service import UserService


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="List CARDZEN users.")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file (default: %(default)s)")
    args = ap.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    users = asyncio.run(UserService.list_users(Database(args.db)))
    for user in users:
        print(f"{user.id}\t{user.username}\t{user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
