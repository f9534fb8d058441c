#!/usr/bin/env python3
"""
Reset a user's password in the CARDZEN SQLite database.

This script DOES NOT read or reveal any existing passwords.  It simply
stores a new PBKDF2 hash for the given username.

Usage:
    python reset_password.py --db ./cardzen.db --username alice --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import os
import sys

from cardzen_api.app.core.config import settings
from cardzen_api.app.core.db import Database
from cardzen_api.app.services.user_service import UserService


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Reset CARDZEN user password (SQLite).")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file (default: %(default)s)")
    ap.add_argument("--username", required=True, help="User whose password is replaced")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    updated = asyncio.run(
        UserService.set_password(
            Database(args.db), args.username, new_password, settings.password_hash_iterations
        )
    )
    if not updated:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        return 2
    print(f"[+] Password updated for user: {args.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
