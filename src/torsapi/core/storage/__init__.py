"""
Storage module for torsapi

Provides the database session factory with default SQLite (file-backed,
zero-config) and optional PostgreSQL support.
"""

from torsapi.core.storage.factory import (
    create_session,
    create_session_factory,
    create_engine_for,
    get_default_session,
    set_default_session,
    reset_default_session,
    is_postgresql_url,
    normalize_postgresql_url,
)

__all__ = [
    "create_session",
    "create_session_factory",
    "create_engine_for",
    "get_default_session",
    "set_default_session",
    "reset_default_session",
    "is_postgresql_url",
    "normalize_postgresql_url",
]
