"""
SQLite database integration and simple migration system.

The ``Database`` class owns the path of the single database file and a
write lock.  Every request that mutates state does so inside
``Database.write()``, which serialises writers and commits the SQLite
transaction before returning, so a change is durable on disk once the
handler responds.  Reads open their own connection through
``Database.cursor()``.

One ``Database`` instance is created by ``main.create_app`` and stored
on ``app.state``; route handlers receive it through the ``get_db``
dependency.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request

from .exceptions import InternalError


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS cards (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            price REAL NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS transactions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            buyer_id INTEGER NOT NULL,
            card_id INTEGER NOT NULL,
            amount REAL NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(buyer_id) REFERENCES users(id),
            FOREIGN KEY(card_id) REFERENCES cards(id)
        );
        """,
    ),
    # Migration 2: indices for owner and buyer lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_cards_user_id ON cards(user_id);
        CREATE INDEX IF NOT EXISTS idx_transactions_buyer_id ON transactions(buyer_id);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Return an absolute path for ``database_url``.

    Absolute paths are returned unchanged; relative paths are resolved
    against the current working directory.
    """
    if os.path.isabs(database_url):
        return database_url
    return os.path.abspath(database_url)


class Database:
    """Handle on the CARDZEN SQLite file."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)
        self._write_lock = threading.Lock()

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  Foreign key enforcement stays off: deleting a card
        keeps the transactions that reference it.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a read cursor and close the connection on exit."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
        except sqlite3.Error as e:
            logger.exception("Database read failed")
            raise InternalError() from e
        finally:
            conn.close()

    @contextmanager
    def write(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor for a mutation under the single-writer lock.

        The transaction is committed when the block exits normally and
        rolled back if it raises.
        """
        with self._write_lock:
            conn = self.get_connection()
            try:
                yield conn.cursor()
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.exception("Database write failed")
                raise InternalError() from e
            except Exception:
                conn.rollback()
                raise
            finally:
                conn.close()

    def init_db(self) -> None:
        """Create the database file if needed and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version, and applies any newer entries of
        ``MIGRATIONS``.  To change the schema, append a migration with an
        incremented version number.
        """
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        existed = os.path.exists(self.path)

        with self.write() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    logger.info("Applying database migration %s", version)
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version

        logger.info(
            "%s database at %s (schema version %s)",
            "Loaded" if existed else "Created",
            self.path,
            current_version,
        )


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.db
