#!/usr/bin/env python3
"""Print an access token for an existing user, for manual API testing.

Usage:
    python create_token.py --username alice --days 30
"""

import argparse
import os
import sys

from cardzen_api.app.core.config import settings
from cardzen_api.app.core.db import Database
from cardzen_api.app.core.security import create_access_token


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Issue a CARDZEN access token.")
    ap.add_argument("--db", default=settings.database_url)
    ap.add_argument("--username", required=True)
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days")
    args = ap.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    with Database(args.db).cursor() as cursor:
        row = cursor.execute(
            "SELECT id, username, email FROM users WHERE username = ?", (args.username,)
        ).fetchone()
    if not row:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        return 2

    token = create_access_token(
        {"id": row["id"], "username": row["username"], "email": row["email"]},
        settings.resolve_secret_key(),
        expires_in=args.days * 24 * 60 * 60,
    )
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
