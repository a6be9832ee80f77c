"""
Test configuration and fixtures for torsapi
"""
import pytest
import sys
import os
import tempfile
from typing import Optional

# Add src directory to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from sqlalchemy import text
from starlette.testclient import TestClient

from torsapi.api.app import TorsApplication
from torsapi.core.storage.factory import (
    create_session,
    reset_default_session,
    set_default_session,
    is_postgresql_url,
)
from torsapi.core.storage.sqlalchemy.models import (
    Base,
    ConfigModel,
    TASK_TABLE_NAME,
    CATEGORY_TABLE_NAME,
    CONFIG_TABLE_NAME,
)
from torsapi.core.store import Store
from torsapi.core.types import CONFIG_ROW_ID, DEFAULT_THEME
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

TEST_API_KEY = "test-key"


def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test that requires external services"
    )


def _get_test_database_url() -> Optional[str]:
    """Get test database URL from environment variable"""
    return os.getenv("TEST_DATABASE_URL")


@pytest.fixture(scope="function")
def temp_db_path():
    """Create a temporary SQLite file path, removed after the test"""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)  # Close file descriptor, we just need the path

    yield db_path

    try:
        if os.path.exists(db_path):
            os.unlink(db_path)
    except OSError:
        pass  # Ignore cleanup errors


@pytest.fixture(scope="function")
def sync_db_session(temp_db_path):
    """
    Create a synchronous database session with fresh tables

    Uses a temporary SQLite file by default, or PostgreSQL when
    TEST_DATABASE_URL points at one (tables are dropped and recreated).
    """
    test_db_url = _get_test_database_url()

    if test_db_url and is_postgresql_url(test_db_url):
        logger.info("Using PostgreSQL database for testing")
        session = create_session(connection_string=test_db_url, async_mode=False)
        Base.metadata.drop_all(session.bind)
    else:
        session = create_session(path=temp_db_path)

    Base.metadata.create_all(session.bind)
    engine = session.bind

    try:
        yield session
    finally:
        try:
            session.rollback()
        except Exception:
            pass

        if test_db_url and is_postgresql_url(test_db_url):
            try:
                for table_name in (TASK_TABLE_NAME, CATEGORY_TABLE_NAME, CONFIG_TABLE_NAME):
                    session.execute(text(f"DELETE FROM {table_name}"))
                session.commit()
            except Exception as e:
                session.rollback()
                logger.debug(f"Cleanup failed (non-critical): {e}")

        session.close()
        engine.dispose()


@pytest.fixture(scope="function")
def store(sync_db_session):
    """Store over the test session with the config row in place"""
    sync_db_session.add(ConfigModel(id=CONFIG_ROW_ID, theme=DEFAULT_THEME))
    sync_db_session.commit()
    return Store(sync_db_session)


@pytest.fixture(scope="function")
def api_app(sync_db_session):
    """Application built around an uninitialized Store (startup initializes it)"""
    return TorsApplication(Store(sync_db_session), api_key=TEST_API_KEY).build()


@pytest.fixture(scope="function")
def client(api_app):
    """TestClient that sends the correct api-key header on every request"""
    with TestClient(api_app, headers={"api-key": TEST_API_KEY}) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def cli_session(sync_db_session):
    """Install the test session as the process default used by CLI commands"""
    set_default_session(sync_db_session)
    yield sync_db_session
    reset_default_session()
