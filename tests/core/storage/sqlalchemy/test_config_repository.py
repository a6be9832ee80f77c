"""
Test ConfigRepository functionality
"""
import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from torsapi.core.storage.factory import create_session
from torsapi.core.storage.sqlalchemy.config_repository import ConfigRepository
from torsapi.core.storage.sqlalchemy.models import (
    ConfigModel,
    TASK_TABLE_NAME,
    CATEGORY_TABLE_NAME,
    CONFIG_TABLE_NAME,
)


class TestConfigRepository:

    @pytest.mark.asyncio
    async def test_create_schema_on_empty_database(self, temp_db_path):
        session = create_session(path=temp_db_path)
        try:
            repo = ConfigRepository(session)
            await repo.create_schema()
            await repo.create_schema()  # second run is a no-op

            tables = set(inspect(session.bind).get_table_names())
            assert {TASK_TABLE_NAME, CATEGORY_TABLE_NAME, CONFIG_TABLE_NAME} <= tables
        finally:
            session.close()
            session.bind.dispose()

    @pytest.mark.asyncio
    async def test_ensure_default_row_inserts_once(self, sync_db_session):
        repo = ConfigRepository(sync_db_session)

        assert await repo.get_theme() is None
        assert await repo.ensure_default_row() is True
        assert await repo.get_theme() == "Desert"

        await repo.set_theme("Snow")
        assert await repo.ensure_default_row() is False
        assert await repo.get_theme() == "Snow"

    @pytest.mark.asyncio
    async def test_set_theme_without_row(self, sync_db_session):
        repo = ConfigRepository(sync_db_session)
        assert await repo.set_theme("Oasis") is False

    @pytest.mark.asyncio
    async def test_theme_check_constraint(self, sync_db_session):
        """The database itself refuses a theme outside the valid set"""
        repo = ConfigRepository(sync_db_session)
        await repo.ensure_default_row()

        with pytest.raises(IntegrityError):
            await repo.set_theme("Jungle")

        assert await repo.get_theme() == "Desert"

    def test_singleton_check_constraint(self, sync_db_session):
        """A second config row cannot be inserted"""
        sync_db_session.add(ConfigModel(id=1, theme="Desert"))
        sync_db_session.commit()

        sync_db_session.add(ConfigModel(id=2, theme="Desert"))
        with pytest.raises(IntegrityError):
            sync_db_session.commit()
        sync_db_session.rollback()
