"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables when it is instantiated.  Defaults are provided for all
fields so that the API runs out of the box in development.  In a
production deployment set ``APP_ENV=production`` and provide
``CARDZEN_JWT_SECRET``; the application refuses to start otherwise.
"""

import os
from dataclasses import dataclass, field


DEVELOPMENT_ENVIRONMENTS = {"development", "dev", "test"}

# Only ever used when APP_ENV names a development environment.
DEV_SECRET_KEY = "cardzen-dev-secret"


def _env(name: str, default: str = ""):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.getenv(name, str(default))))


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = _env("PROJECT_NAME", "CARDZEN API")
    api_version: str = _env("API_VERSION", "1.0.0")
    environment: str = _env("APP_ENV", "development")
    log_level: str = _env("LOG_LEVEL", "INFO")
    log_file: str = _env("LOG_FILE", "")

    # Signing secret for access tokens.  Leave empty only in development.
    secret_key: str = _env("CARDZEN_JWT_SECRET", "")
    access_token_expire_minutes: int = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 60)

    # PBKDF2 work factor used for new password hashes.  Existing hashes
    # carry their own iteration count.
    password_hash_iterations: int = _env_int("PASSWORD_HASH_ITERATIONS", 100_000)

    # Path to the SQLite database file.  Relative paths are resolved
    # against the current working directory by the ``db`` module.
    database_url: str = _env("CARDZEN_DB", "cardzen.db")

    host: str = _env("HOST", "0.0.0.0")
    port: int = _env_int("PORT", 3000)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in DEVELOPMENT_ENVIRONMENTS

    def resolve_secret_key(self) -> str:
        """Return the signing secret, falling back to a development key.

        Raises
        ------
        RuntimeError
            If no secret is configured outside a development environment.
        """
        if self.secret_key:
            return self.secret_key
        if self.is_development:
            return DEV_SECRET_KEY
        raise RuntimeError(
            "CARDZEN_JWT_SECRET must be set when APP_ENV is %r" % self.environment
        )


# Instantiated once for scripts and the default application.  Tests and
# embedding code may build their own ``Settings`` and pass it to
# ``create_app``.
settings = Settings()
