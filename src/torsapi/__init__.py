"""
torsapi - Tors Community task and category service

HTTP service with CRUD operations over tasks and categories plus a
single-row theme configuration, backed by a relational store.

Modules:
- core.store: Store (validation and referential-integrity rules)
- core.storage: Database session factory (SQLite default, PostgreSQL optional)
- api: Starlette application with api-key authentication
- cli: typer CLI (serve, db, tasks, categories, theme)
"""

__version__ = "1.0.0"

from torsapi.core import (
    Store,
    create_session,
    create_session_factory,
    get_default_session,
    Theme,
    DEFAULT_THEME,
    TorsAPIError,
    ValidationError,
    NotFoundError,
    AuthError,
    ServerMisconfiguration,
)

__all__ = [
    "Store",
    "create_session",
    "create_session_factory",
    "get_default_session",
    "Theme",
    "DEFAULT_THEME",
    "TorsAPIError",
    "ValidationError",
    "NotFoundError",
    "AuthError",
    "ServerMisconfiguration",
    "__version__",
]
