import asyncio

import create_token
import list_users
import reset_password
from cardzen_api.app.core.security import decode_access_token, verify_password
from cardzen_api.app.schemas.user import UserCreate
from cardzen_api.app.services.user_service import UserService


def _add_user(db, username="alice", email="a@x.com", password="pw1"):
    asyncio.run(
        UserService.create_user(db, UserCreate(username=username, email=email, password=password), 1_000)
    )


def test_list_users_prints_users_without_hashes(db, capsys):
    _add_user(db)
    _add_user(db, "bob", "b@x.com")

    assert list_users.main(["--db", db.path]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["1\talice\ta@x.com", "2\tbob\tb@x.com"]


def test_list_users_missing_database(tmp_path, capsys):
    assert list_users.main(["--db", str(tmp_path / "missing.db")]) == 1
    assert "DB not found" in capsys.readouterr().err


def test_reset_password(db):
    _add_user(db)

    assert reset_password.main(["--db", db.path, "--username", "alice", "--password", "fresh"]) == 0

    with db.cursor() as cursor:
        stored = cursor.execute("SELECT password_hash FROM users").fetchone()["password_hash"]
    assert verify_password("fresh", stored)
    assert not verify_password("pw1", stored)


def test_reset_password_unknown_user(db):
    assert reset_password.main(["--db", db.path, "--username", "ghost", "--password", "x"]) == 2


def test_create_token_for_existing_user(db, capsys, monkeypatch):
    _add_user(db)
    monkeypatch.setattr(create_token.settings, "secret_key", "script-secret")

    assert create_token.main(["--db", db.path, "--username", "alice"]) == 0

    token = capsys.readouterr().out.strip()
    payload = decode_access_token(token, "script-secret")
    assert payload["id"] == 1
    assert payload["username"] == "alice"


def test_create_token_unknown_user(db):
    assert create_token.main(["--db", db.path, "--username", "ghost"]) == 2


def test_run_serves_app_on_configured_host_and_port(monkeypatch):
    import run

    served = []

    class _Server:
        def __init__(self, config):
            self.config = config
            self.started = True

        async def serve(self):
            served.append(self.config)

    monkeypatch.setattr(run, "Server", _Server)
    monkeypatch.setattr(run.settings, "host", "127.0.0.1")
    monkeypatch.setattr(run.settings, "port", 4321)

    asyncio.run(run.main())

    [config] = served
    assert config.app is run.app
    assert config.host == "127.0.0.1"
    assert config.port == 4321
    assert config.reload is False


def test_run_exits_when_startup_fails(monkeypatch):
    import pytest
    import run

    class _FailedServer:
        def __init__(self, config):
            self.started = False

        async def serve(self):
            return None

    monkeypatch.setattr(run, "Server", _FailedServer)

    with pytest.raises(SystemExit) as excinfo:
        asyncio.run(run.main())
    assert excinfo.value.code == 1
