"""
Operation-level database session context using ContextVar

A Store built on a session factory opens a fresh session for each
operation and publishes it here, so the repositories of that operation
(and nothing running concurrently in another task) see the same session.
"""

from contextvars import ContextVar
from contextlib import asynccontextmanager
from typing import Callable, Optional, Union

from sqlalchemy.orm import Session
from sqlalchemy.ext.asyncio import AsyncSession

from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

# Context variable holding the session of the operation in progress
_db_session_context: ContextVar[Optional[Union[Session, AsyncSession]]] = ContextVar(
    "db_session", default=None
)


def get_operation_session() -> Optional[Union[Session, AsyncSession]]:
    """
    Get the session of the operation running in the current context

    Returns:
        Current database session, or None outside an operation
    """
    return _db_session_context.get()


@asynccontextmanager
async def operation_session(
    session_factory: Callable[[], Union[Session, AsyncSession]],
):
    """
    Provide a session for one operation and close it afterwards

    If the current context already has a session (a nested operation), it
    is reused and left open.

    Args:
        session_factory: Callable returning a new Session or AsyncSession

    Yields:
        Database session
    """
    current = get_operation_session()
    if current is not None:
        yield current
        return

    session = session_factory()
    token = _db_session_context.set(session)
    try:
        yield session
    finally:
        _db_session_context.reset(token)
        try:
            if isinstance(session, AsyncSession):
                await session.close()
            else:
                session.close()
        except Exception as e:
            logger.warning(f"Error closing operation session: {str(e)}")
