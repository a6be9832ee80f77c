"""
SQLite dialect configuration (default)
"""

from typing import Dict, Any
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine


class SQLiteDialect:
    """SQLite dialect configuration (default, file-backed, sync only)"""

    supports_async = False

    @staticmethod
    def get_connection_string(path: str = ":memory:", async_mode: bool = False) -> str:
        """
        Generate SQLite connection string

        Args:
            path: Database file path, ":memory:" for in-memory database
            async_mode: Must be False; SQLite storage is sync only
        """
        if path == ":memory:":
            return "sqlite:///:memory:"
        abs_path = str(Path(path).absolute())
        return f"sqlite:///{abs_path}"

    @staticmethod
    def get_engine_kwargs() -> Dict[str, Any]:
        """SQLite specific engine parameters"""
        return {
            # The session may be used from the ASGI worker thread
            "connect_args": {"check_same_thread": False},
        }

    @staticmethod
    def configure_engine(engine: Engine) -> None:
        """Enforce foreign keys on every new connection"""

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
