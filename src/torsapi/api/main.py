"""
Main entry point for the torsapi API service

This is the application layer where environment variables are read for
service deployment configuration. Library code (Store, TorsApplication)
only takes explicit parameters.
"""

import os
import time
from typing import Optional

import uvicorn
from starlette.applications import Starlette

from torsapi.api.app import TorsApplication, DEFAULT_CORS_ORIGINS
from torsapi.core.storage.factory import create_session_factory, _get_database_url_from_env
from torsapi.core.store import Store
from torsapi.core.utils.helpers import env_flag, get_url_with_host_and_port
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)
start_time = time.time()

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3007


def get_api_key_from_env() -> Optional[str]:
    """
    Get the shared secret from TORSAPI_API_KEY, falling back to API_KEY

    Returns:
        The configured key, or None if neither variable is set to a non-empty value
    """
    return os.getenv("TORSAPI_API_KEY") or os.getenv("API_KEY") or None


def get_host_from_env() -> str:
    return os.getenv("TORSAPI_API_HOST", os.getenv("API_HOST", DEFAULT_HOST))


def get_port_from_env() -> int:
    """Get the bind port from TORSAPI_API_PORT or PORT (default 3007)"""
    raw = os.getenv("TORSAPI_API_PORT", os.getenv("PORT", str(DEFAULT_PORT)))
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid port value: {raw}, using default {DEFAULT_PORT}")
        return DEFAULT_PORT


def get_cors_origins_from_env() -> list[str]:
    raw = os.getenv("TORSAPI_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def create_store_from_env(
    connection_string: Optional[str] = None,
    db_path: Optional[str] = None,
) -> Store:
    """
    Create a Store for the configured database

    Explicit arguments win over TORSAPI_DATABASE_URL / DATABASE_URL and
    TORSAPI_DB_PATH. The Store opens one session per operation, so
    concurrent requests never share a session.
    """
    if connection_string is None and db_path is None:
        connection_string = _get_database_url_from_env()
    session_factory = create_session_factory(connection_string=connection_string, path=db_path)
    return Store(session_factory)


def create_app_from_env(
    store: Optional[Store] = None,
    api_key: Optional[str] = None,
) -> Starlette:
    """
    Create the application using environment configuration

    This is the main function for creating the API application. It is used
    by both the CLI serve command and main().

    Args:
        store: Store to serve. If None, one is created from the environment.
        api_key: Shared secret. If None, read from the environment.

    Returns:
        Starlette application instance
    """
    if store is None:
        store = create_store_from_env()
        close_store_on_shutdown = True
    else:
        close_store_on_shutdown = False

    if api_key is None:
        api_key = get_api_key_from_env()

    cors_allow_all = env_flag(os.getenv("TORSAPI_CORS_ALLOW_ALL"), default=False)

    return TorsApplication(
        store=store,
        api_key=api_key,
        cors_origins=get_cors_origins_from_env(),
        cors_allow_all=cors_allow_all,
        initialize_on_startup=True,
        close_store_on_shutdown=close_store_on_shutdown,
    ).build()


def main():
    """
    Main entry point for API service (can be called via entry point)
    """
    startup_time = time.time() - start_time
    logger.info(f"Service initialization completed in {startup_time:.2f} seconds")

    app = create_app_from_env()

    host = get_host_from_env()
    port = get_port_from_env()
    logger.info(f"Tors Community API running on {get_url_with_host_and_port(host, port)}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        workers=1,  # Single worker: one logical writer
        loop="asyncio",
        access_log=True,
    )


if __name__ == "__main__":
    main()
