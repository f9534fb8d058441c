"""
Main entrypoint for the CARDZEN API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn cardzen_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.exceptions import CardzenError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def _message(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"message": ...}``."""

    @app.exception_handler(CardzenError)
    async def cardzen_error_handler(request: Request, exc: CardzenError) -> JSONResponse:
        return _message(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = "Invalid request"
        if errors and errors[0].get("type") == "json_invalid":
            detail = "Request body is not valid JSON"
        elif errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            detail = f"Invalid {location}: {first.get('msg')}" if location else first.get("msg", detail)
        return _message(status.HTTP_400_BAD_REQUEST, detail)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _message(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use.  Defaults to the process‑wide ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.

    Raises
    ------
    RuntimeError
        If no signing secret is configured outside development.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)
    app.state.settings = app_settings
    app.state.secret_key = app_settings.resolve_secret_key()
    if not app_settings.secret_key:
        logger.warning(
            "CARDZEN_JWT_SECRET is not set; using the development signing key (APP_ENV=%s)",
            app_settings.environment,
        )
    app.state.db = Database(app_settings.database_url)

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "CARDZEN API is running!"

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if it does not exist and brings the
        # schema up to date.  Any failure aborts startup.
        try:
            app.state.db.init_db()
        except Exception:
            logger.exception("Failed to initialise database at %s", app.state.db.path)
            raise

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
