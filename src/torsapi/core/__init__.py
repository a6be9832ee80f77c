"""
Core module for torsapi

- core.store: Store, the task/category/theme service with integrity rules
- core.storage: Database session factory (SQLite default, PostgreSQL optional)
- core.errors: Exception hierarchy mapped to HTTP status codes by the API
- core.types: Theme constants and serialized shapes
"""

from torsapi.core.errors import (
    TorsAPIError,
    ValidationError,
    NotFoundError,
    AuthError,
    ServerMisconfiguration,
)
from torsapi.core.store import Store
from torsapi.core.storage import (
    create_session,
    create_session_factory,
    get_default_session,
)
from torsapi.core.types import Theme, DEFAULT_THEME

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
]
