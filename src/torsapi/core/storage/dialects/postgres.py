"""
PostgreSQL dialect configuration (optional, requires [postgres] extra)
"""

from typing import Dict, Any

from sqlalchemy.engine import Engine


def normalize_postgresql_url(url: str, async_mode: bool) -> str:
    """
    Normalize PostgreSQL URL to use the driver matching the session mode

    Args:
        url: PostgreSQL connection string (postgres://, postgresql://, or with driver)
        async_mode: True for asyncpg, False for psycopg2

    Returns:
        Connection string with explicit driver
    """
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]

    if "://" not in url:
        raise ValueError(f"Invalid PostgreSQL connection string: {url}")

    scheme, rest = url.split("://", 1)
    if async_mode:
        if scheme == "postgresql+asyncpg":
            return url
        return f"postgresql+asyncpg://{rest}"
    if scheme == "postgresql+psycopg2":
        return url
    return f"postgresql+psycopg2://{rest}"


class PostgreSQLDialect:
    """PostgreSQL dialect configuration (asyncpg by default, psycopg2 for sync)"""

    supports_async = True

    @staticmethod
    def get_connection_string(url: str, async_mode: bool = True) -> str:
        """
        Generate PostgreSQL connection string with the driver for the mode

        Args:
            url: PostgreSQL connection string
            async_mode: Whether the engine will be async
        """
        return normalize_postgresql_url(url, async_mode)

    @staticmethod
    def get_engine_kwargs() -> Dict[str, Any]:
        """PostgreSQL specific engine parameters"""
        return {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_pre_ping": True,
            "pool_recycle": 3600,
        }

    @staticmethod
    def configure_engine(engine: Engine) -> None:
        """PostgreSQL enforces foreign keys natively"""
        return None
