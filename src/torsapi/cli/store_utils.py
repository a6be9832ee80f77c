"""
Store access helpers for CLI commands
"""

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import typer

from torsapi.core.errors import TorsAPIError
from torsapi.core.storage import get_default_session
from torsapi.core.store import Store
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def get_cli_store() -> Store:
    """
    Build a Store on the process default session

    The database comes from TORSAPI_DATABASE_URL / DATABASE_URL or
    TORSAPI_DB_PATH, the same configuration the server reads.
    """
    return Store(get_default_session())


def run_store_operation(operation: Callable[[Store], Awaitable[T]]) -> T:
    """
    Initialize the store, run one operation, and report domain errors

    Domain errors (not found, validation) are printed to stderr and end
    the command with exit code 1.

    Args:
        operation: Coroutine function taking the Store

    Returns:
        Whatever the operation returns
    """
    store = get_cli_store()

    async def _run() -> Any:
        await store.initialize()
        return await operation(store)

    try:
        return asyncio.run(_run())
    except TorsAPIError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)
