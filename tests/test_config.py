import pytest

from cardzen_api.app.core.config import DEV_SECRET_KEY, Settings
from cardzen_api.app.main import create_app


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("CARDZEN_JWT_SECRET", "from-env")
    monkeypatch.setenv("CARDZEN_DB", "other.db")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "5")

    settings = Settings()

    assert settings.secret_key == "from-env"
    assert settings.database_url == "other.db"
    assert settings.port == 8080
    assert settings.access_token_expire_minutes == 5


def test_defaults(monkeypatch):
    for name in ("APP_ENV", "CARDZEN_JWT_SECRET", "CARDZEN_DB", "PORT", "ACCESS_TOKEN_EXPIRE_MINUTES"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.environment == "development"
    assert settings.database_url == "cardzen.db"
    assert settings.port == 3000
    assert settings.access_token_expire_minutes == 60


def test_development_falls_back_to_dev_secret():
    assert Settings(environment="development", secret_key="").resolve_secret_key() == DEV_SECRET_KEY


def test_explicit_secret_wins():
    assert Settings(environment="production", secret_key="prod").resolve_secret_key() == "prod"


def test_production_without_secret_refuses_to_start(tmp_path):
    settings = Settings(environment="production", secret_key="", database_url=str(tmp_path / "x.db"))

    with pytest.raises(RuntimeError):
        settings.resolve_secret_key()
    with pytest.raises(RuntimeError):
        create_app(settings)
