"""
Config repository for the singleton config row and schema setup
"""

from typing import Optional
from sqlalchemy import select, update
from torsapi.core.storage.sqlalchemy.base_repository import BaseRepository
from torsapi.core.storage.sqlalchemy.models import Base, ConfigModel
from torsapi.core.types import CONFIG_ROW_ID, DEFAULT_THEME
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)


class ConfigRepository(BaseRepository):
    """
    Config repository for database operations

    The config table holds exactly one row (id=1). This repository creates
    it once and only ever updates it afterwards.
    """

    async def create_schema(self) -> None:
        """Create all torsapi tables that do not exist yet"""
        try:
            if self.is_async:
                await self.db.run_sync(
                    lambda sync_session: Base.metadata.create_all(sync_session.connection())
                )
            else:
                Base.metadata.create_all(self.db.connection())
            await self._commit()
        except Exception as e:
            logger.error(f"Error creating schema: {str(e)}")
            await self._rollback()
            raise

    async def ensure_default_row(self, theme: str = DEFAULT_THEME) -> bool:
        """
        Insert the config row if the table is empty

        Args:
            theme: Theme for a freshly inserted row

        Returns:
            True if the row was inserted, False if it already existed
        """
        try:
            existing = await self._get_by_id(ConfigModel, CONFIG_ROW_ID)
            if existing is not None:
                return False

            self.db.add(ConfigModel(id=CONFIG_ROW_ID, theme=theme))
            await self._commit()
            logger.debug(f"Inserted default config row (theme={theme})")
            return True

        except Exception as e:
            logger.error(f"Error inserting default config row: {str(e)}")
            await self._rollback()
            raise

    async def get_theme(self) -> Optional[str]:
        """
        Get the current theme

        Returns:
            Theme string, or None if the config row is missing
        """
        result = await self._execute(
            select(ConfigModel.theme).where(ConfigModel.id == CONFIG_ROW_ID)
        )
        return result.scalar_one_or_none()

    async def set_theme(self, theme: str) -> bool:
        """
        Update the theme of the config row

        Returns:
            True if successful, False if the config row is missing
        """
        try:
            result = await self._execute(
                update(ConfigModel)
                .where(ConfigModel.id == CONFIG_ROW_ID)
                .values(theme=theme)
            )
            if result.rowcount == 0:
                await self._rollback()
                return False
            await self._commit()
            logger.debug(f"Set theme to {theme}")
            return True

        except Exception as e:
            logger.error(f"Error setting theme: {str(e)}")
            await self._rollback()
            raise
