"""
Business logic for users.

Registration stores a salted PBKDF2 hash of the password; login
verifies it and issues a signed access token.  Both failure cases of
login (unknown username, wrong password) produce the same error.
"""

import logging
import sqlite3
from typing import Any, Dict

from ..core.db import Database
from ..core.exceptions import ValidationError
from ..core.security import create_access_token, hash_password, verify_password
from ..schemas.user import UserCreate, UserLogin, UserRead


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class UserService:
    """Registration and authentication of marketplace users."""

    @classmethod
    async def create_user(
        cls, db: Database, data: UserCreate, iterations: int
    ) -> UserRead:
        """Register a new user.

        ``username``, ``email`` and ``password`` must all be non‑empty.
        A single query checks whether the username or the email is
        already taken.  Raises ``ValidationError`` in either case.
        """
        if not data.username or not data.email or not data.password:
            raise ValidationError("All fields are required")

        password_hash = hash_password(data.password, iterations)
        with db.write() as cursor:
            exists = cursor.execute(
                "SELECT id FROM users WHERE username = ? OR email = ?",
                (data.username, data.email),
            ).fetchone()
            if exists:
                raise ValidationError("Username or email already exists")
            try:
                cursor.execute(
                    "INSERT INTO users (username, email, password_hash) VALUES (?, ?, ?)",
                    (data.username, data.email, password_hash),
                )
            except sqlite3.IntegrityError as e:
                raise ValidationError("Username or email already exists") from e
            user_id = cursor.lastrowid
        logger.info("Registered user %s (id=%s)", data.username, user_id)
        return UserRead(id=user_id, username=data.username, email=data.email)

    @classmethod
    async def authenticate(
        cls, db: Database, data: UserLogin, secret_key: str, expires_in: int
    ) -> Dict[str, Any]:
        """Check credentials and return a token with the user summary.

        Raises ``ValidationError`` with the same message whether the
        username is unknown or the password is wrong.
        """
        if not data.username or not data.password:
            raise ValidationError("Username and password required")

        with db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username, email, password_hash FROM users WHERE username = ?",
                (data.username,),
            ).fetchone()

        if not row or not verify_password(data.password, row["password_hash"]):
            logger.warning("Failed login for username %r", data.username)
            raise ValidationError(INVALID_CREDENTIALS)

        user = UserRead(id=row["id"], username=row["username"], email=row["email"])
        token = create_access_token(user.model_dump(), secret_key, expires_in)
        logger.info("User %s logged in", user.username)
        return {"message": "Login successful", "token": token, "user": user}

    @classmethod
    async def list_users(cls, db: Database) -> list[UserRead]:
        """Return every registered user without password hashes."""
        with db.cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, username, email FROM users ORDER BY id"
            ).fetchall()
        return [UserRead(id=row["id"], username=row["username"], email=row["email"]) for row in rows]

    @classmethod
    async def set_password(
        cls, db: Database, username: str, password: str, iterations: int
    ) -> bool:
        """Replace the password hash of ``username``.

        Returns ``False`` if no such user exists.
        """
        password_hash = hash_password(password, iterations)
        with db.write() as cursor:
            cursor.execute(
                "UPDATE users SET password_hash = ? WHERE username = ?",
                (password_hash, username),
            )
            updated = cursor.rowcount > 0
        if updated:
            logger.info("Password reset for user %s", username)
        return updated
