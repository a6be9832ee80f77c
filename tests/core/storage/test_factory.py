"""
Test the database session factory
"""
import os
import pytest
from unittest.mock import patch
from sqlalchemy import text
from sqlalchemy.orm import Session

from torsapi.core.storage.factory import (
    create_session,
    create_session_factory,
    create_engine_for,
    get_default_session,
    reset_default_session,
    is_postgresql_url,
    is_sqlite_url,
    normalize_postgresql_url,
    sqlite_path_from_url,
    _get_database_url_from_env,
    _get_default_db_path,
)
from torsapi.core.storage.dialects.postgres import PostgreSQLDialect


class TestUrlHelpers:

    def test_is_postgresql_url(self):
        assert is_postgresql_url("postgresql://u:p@localhost/db")
        assert is_postgresql_url("postgres://u:p@localhost/db")
        assert is_postgresql_url("postgresql+asyncpg://u:p@localhost/db")
        assert not is_postgresql_url("sqlite:///tors.db")

    def test_is_sqlite_url(self):
        assert is_sqlite_url("sqlite:///tors.db")
        assert not is_sqlite_url("postgresql://localhost/db")

    def test_normalize_postgresql_url(self):
        assert (
            normalize_postgresql_url("postgres://u:p@h/db", async_mode=True)
            == "postgresql+asyncpg://u:p@h/db"
        )
        assert (
            normalize_postgresql_url("postgresql://u:p@h/db", async_mode=False)
            == "postgresql+psycopg2://u:p@h/db"
        )
        assert (
            normalize_postgresql_url("postgresql+psycopg2://u:p@h/db", async_mode=False)
            == "postgresql+psycopg2://u:p@h/db"
        )

    def test_sqlite_path_from_url(self):
        assert sqlite_path_from_url("sqlite:///:memory:") == ":memory:"
        assert sqlite_path_from_url("sqlite://") == ":memory:"
        assert os.path.isabs(sqlite_path_from_url("sqlite:///data/tors.db"))


class TestEnvironment:

    def test_database_url_prefers_prefixed_variable(self):
        with patch.dict(
            os.environ,
            {"TORSAPI_DATABASE_URL": "sqlite:///a.db", "DATABASE_URL": "sqlite:///b.db"},
        ):
            assert _get_database_url_from_env() == "sqlite:///a.db"

    def test_database_url_fallback(self):
        with patch.dict(os.environ, {"DATABASE_URL": "sqlite:///b.db"}):
            os.environ.pop("TORSAPI_DATABASE_URL", None)
            assert _get_database_url_from_env() == "sqlite:///b.db"

    def test_default_db_path(self, tmp_path):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("TORSAPI_DB_PATH", None)
            assert _get_default_db_path().endswith("tors-server.db")
        with patch.dict(os.environ, {"TORSAPI_DB_PATH": str(tmp_path / "x.db")}):
            assert _get_default_db_path() == str(tmp_path / "x.db")


class TestCreateSession:

    def test_sqlite_file_session(self, tmp_path):
        db_file = tmp_path / "nested" / "tors.db"
        session = create_session(path=str(db_file))
        try:
            assert isinstance(session, Session)
            session.execute(text("SELECT 1"))
            assert db_file.parent.exists()
        finally:
            session.close()
            session.bind.dispose()

    def test_sqlite_foreign_keys_enabled(self, tmp_path):
        session = create_session(connection_string=f"sqlite:///{tmp_path / 'fk.db'}")
        try:
            assert session.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            session.close()
            session.bind.dispose()

    def test_sqlite_rejects_async_mode(self):
        with pytest.raises(ValueError):
            create_engine_for(path=":memory:", async_mode=True)

    def test_unsupported_url(self):
        with pytest.raises(ValueError):
            create_session(connection_string="mysql://localhost/db")

    def test_default_session_is_cached(self, tmp_path):
        reset_default_session()
        try:
            with patch.dict(os.environ, {"TORSAPI_DB_PATH": str(tmp_path / "default.db")}):
                os.environ.pop("TORSAPI_DATABASE_URL", None)
                os.environ.pop("DATABASE_URL", None)
                first = get_default_session()
                assert get_default_session() is first
        finally:
            reset_default_session()


class TestDialectSelection:

    def test_async_mode_defaults_to_dialect_support(self):
        engine, async_mode = create_engine_for(path=":memory:")
        try:
            assert async_mode is False
        finally:
            engine.dispose()

    def test_postgresql_connection_string_follows_mode(self):
        assert (
            PostgreSQLDialect.get_connection_string("postgres://u:p@h/db", async_mode=False)
            == "postgresql+psycopg2://u:p@h/db"
        )
        assert (
            PostgreSQLDialect.get_connection_string("postgresql://u:p@h/db")
            == "postgresql+asyncpg://u:p@h/db"
        )

    def test_session_factory_opens_independent_sessions(self, tmp_path):
        factory = create_session_factory(path=str(tmp_path / "factory.db"))
        first, second = factory(), factory()
        try:
            assert isinstance(first, Session)
            assert first is not second
            assert first.bind is second.bind
        finally:
            first.close()
            second.close()
            first.bind.dispose()
