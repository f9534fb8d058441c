"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (auth, cards, transactions) has its own
schema, service and endpoint module; ``core`` holds configuration,
security, persistence, errors and logging.
"""

from .main import app, create_app  # noqa: F401
