"""
Database dialect registry
"""

from importlib.util import find_spec
from typing import Dict, Type, Protocol, Any
from sqlalchemy.engine import Engine
from torsapi.core.storage.dialects.sqlite import SQLiteDialect


# Dialect protocol
class DialectConfig(Protocol):
    """Database dialect configuration interface"""

    supports_async: bool

    @staticmethod
    def get_connection_string(target: str, async_mode: bool) -> str: ...

    @staticmethod
    def get_engine_kwargs() -> Dict[str, Any]: ...

    @staticmethod
    def configure_engine(engine: Engine) -> None: ...


# Dialect registry
_DIALECT_REGISTRY: Dict[str, Type] = {}


def register_dialect(name: str, dialect_class: Type):
    """Register database dialect"""
    _DIALECT_REGISTRY[name] = dialect_class


def get_dialect_config(name: str):
    """Get database dialect configuration instance"""
    if name not in _DIALECT_REGISTRY:
        raise ValueError(
            f"Unsupported dialect: {name}. "
            f"Available: {list(_DIALECT_REGISTRY.keys())}"
        )
    return _DIALECT_REGISTRY[name]


# Register built-in dialects
register_dialect("sqlite", SQLiteDialect)

# Lazy register PostgreSQL (only when one of its drivers is installed)
if find_spec("psycopg2") is not None or find_spec("asyncpg") is not None:
    from torsapi.core.storage.dialects.postgres import PostgreSQLDialect
    register_dialect("postgresql", PostgreSQLDialect)
    register_dialect("postgres", PostgreSQLDialect)  # Alias
