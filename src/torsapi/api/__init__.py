"""
API service layer for torsapi

Exposes the Store over HTTP as a Starlette application. Import create_app
to build an application around an existing Store.
"""

from typing import Optional, Sequence

__all__ = [
    "create_app",
]


def create_app(
    store,
    api_key: Optional[str] = None,
    cors_origins: Optional[Sequence[str]] = None,
    cors_allow_all: bool = False,
    initialize_on_startup: bool = True,
):
    """
    Create the API application for a Store

    Args:
        store: Store instance the routes operate on
        api_key: Shared secret expected in the api-key header
        cors_origins: Allowed CORS origins (optional)
        cors_allow_all: Allow any origin (default: False)
        initialize_on_startup: Run store.initialize() at startup (default: True)

    Returns:
        Starlette application instance
    """
    from torsapi.api.app import TorsApplication

    return TorsApplication(
        store=store,
        api_key=api_key,
        cors_origins=cors_origins,
        cors_allow_all=cors_allow_all,
        initialize_on_startup=initialize_on_startup,
    ).build()
