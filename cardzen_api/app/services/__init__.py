"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to the
SQLite database through the ``Database`` handle it is given.  Services
raise the errors defined in ``core.exceptions``; translating them into
HTTP responses is left to the application.
"""
