import os
import sqlite3

import pytest
from fastapi.testclient import TestClient

from cardzen_api.app.core.db import MIGRATIONS, Database
from cardzen_api.app.core.exceptions import InternalError


def _tables(db):
    with db.cursor() as cursor:
        rows = cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row["name"] for row in rows}


def test_init_creates_schema(tmp_path):
    db = Database(str(tmp_path / "cardzen.db"))
    db.init_db()

    assert (tmp_path / "cardzen.db").exists()
    assert {"users", "cards", "transactions", "migrations"} <= _tables(db)


def test_init_is_idempotent_and_keeps_data(tmp_path):
    path = str(tmp_path / "cardzen.db")
    db = Database(path)
    db.init_db()
    with db.write() as cursor:
        cursor.execute(
            "INSERT INTO users (username, email, password_hash) VALUES ('a', 'a@x.com', 'h')"
        )

    reopened = Database(path)
    reopened.init_db()

    with reopened.cursor() as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations ORDER BY version")]
        users = cursor.execute("SELECT username FROM users").fetchall()
    assert versions == [version for version, _ in MIGRATIONS]
    assert [row["username"] for row in users] == ["a"]


def test_init_creates_parent_directory(tmp_path):
    db = Database(str(tmp_path / "data" / "cardzen.db"))
    db.init_db()

    assert (tmp_path / "data" / "cardzen.db").exists()


def test_init_failure_propagates(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(OSError):
        Database(str(blocker / "cardzen.db")).init_db()


def test_write_rolls_back_on_error(db):
    with pytest.raises(RuntimeError):
        with db.write() as cursor:
            cursor.execute(
                "INSERT INTO users (username, email, password_hash) VALUES ('b', 'b@x.com', 'h')"
            )
            raise RuntimeError("boom")

    with db.cursor() as cursor:
        assert cursor.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"] == 0


def test_write_is_durable_for_new_connections(db):
    with db.write() as cursor:
        cursor.execute(
            "INSERT INTO cards (user_id, name, description, price) VALUES (1, 'Holo', 'rare', 0)"
        )

    conn = sqlite3.connect(db.path)
    try:
        assert conn.execute("SELECT price FROM cards").fetchone()[0] == 0
    finally:
        conn.close()


def test_relative_path_is_resolved(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert Database("cardzen.db").path == os.path.join(os.getcwd(), "cardzen.db")


def test_sqlite_errors_become_internal_errors(tmp_path):
    db = Database(str(tmp_path / "empty.db"))

    with pytest.raises(InternalError):
        with db.cursor() as cursor:
            cursor.execute("SELECT * FROM cards")
    with pytest.raises(InternalError):
        with db.write() as cursor:
            cursor.execute("INSERT INTO cards (name) VALUES ('x')")


def test_storage_failure_is_reported_as_500(app):
    # Without the lifespan context the startup hook never creates the schema.
    client = TestClient(app)

    resp = client.get("/cards")

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}
