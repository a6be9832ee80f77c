"""
Shared session plumbing for the SQLAlchemy repositories

Every repository accepts either a sync Session or an AsyncSession and
exposes async methods, so callers look the same for both storage modes.
"""

from typing import Any, Optional, Type, TypeVar, Union
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.ext.asyncio import AsyncSession
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType")

# Integer primary keys are signed 64-bit in every supported database
MAX_ROW_ID = 2 ** 63 - 1


def is_storable_id(row_id: Any) -> bool:
    """Return True if row_id fits an integer primary key column"""
    if isinstance(row_id, bool) or not isinstance(row_id, int):
        return False
    return -MAX_ROW_ID - 1 <= row_id <= MAX_ROW_ID


class BaseRepository:
    """Base class holding the session and the sync/async dispatch helpers"""

    def __init__(self, db: Union[Session, AsyncSession]):
        """
        Args:
            db: Database session (sync or async)
        """
        self.db = db
        self.is_async = isinstance(db, AsyncSession)

    async def _execute(self, stmt: Any):
        if self.is_async:
            return await self.db.execute(stmt)
        return self.db.execute(stmt)

    async def _commit(self) -> None:
        if self.is_async:
            await self.db.commit()
        else:
            self.db.commit()

    async def _rollback(self) -> None:
        if self.is_async:
            await self.db.rollback()
        else:
            self.db.rollback()

    async def _refresh(self, instance: Any) -> None:
        if self.is_async:
            await self.db.refresh(instance)
        else:
            self.db.refresh(instance)

    async def _get_by_id(self, model_class: Type[ModelType], row_id: int) -> Optional[ModelType]:
        """
        Load a row by primary key, bypassing stale identity-map state

        An id outside the column range cannot exist and returns None.
        """
        if not is_storable_id(row_id):
            return None
        stmt = (
            select(model_class)
            .where(model_class.id == row_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()
