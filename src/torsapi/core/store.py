"""
Store - durable state and integrity rules for tasks, categories and theme

The Store is the only component that decides whether an operation is
allowed. It validates field values, turns missing rows into NotFoundError,
and runs each operation as one unit of work.

Built on a session factory, every operation gets its own session, so
concurrent requests never share one. Built on a single session (tests,
CLI), operations run one after another on that session.

Usage:
    store = Store(create_session_factory(path="./tors-server.db"))
    await store.initialize()
    task_id = await store.create_task("Fix roof", "It leaks", "2 days")
"""

from contextlib import nullcontext
from functools import wraps
from typing import Any, Awaitable, Callable, List, Optional, TypeVar, Union

from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from torsapi.core.errors import NotFoundError, ValidationError
from torsapi.core.storage.context import get_operation_session, operation_session
from torsapi.core.storage.sqlalchemy.task_repository import TaskRepository
from torsapi.core.storage.sqlalchemy.category_repository import CategoryRepository
from torsapi.core.storage.sqlalchemy.config_repository import ConfigRepository
from torsapi.core.types import Theme, TaskDict, CategoryDict
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

TASK_NOT_FOUND = "Task not found."
CATEGORY_NOT_FOUND = "Category not found."
INVALID_THEME = "Invalid theme."


def store_operation(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Run a Store method as one unit of work

    The method runs on the operation's session. On success the transaction
    is ended (reads included, so no session pins an old snapshot); on any
    exception it is rolled back before the exception propagates.
    """

    @wraps(func)
    async def wrapper(self: "Store", *args: Any, **kwargs: Any) -> T:
        async with self._session_scope():
            try:
                result = await func(self, *args, **kwargs)
            except Exception:
                await self._rollback()
                raise
            await self._commit()
            return result

    return wrapper


def _require_text(field_name: str, value: Any) -> str:
    if value is None:
        raise ValidationError(f"Missing required field: {field_name}.")
    if not isinstance(value, str):
        raise ValidationError(f"Field '{field_name}' must be text.")
    if value == "":
        raise ValidationError(f"Field '{field_name}' must not be empty.")
    return value


class Store:
    """
    Task, category and theme store

    Args:
        db: A session factory (sessionmaker / async_sessionmaker), opening
            one session per operation, or a single Session / AsyncSession
            used for every operation
    """

    def __init__(self, db: Union[Session, AsyncSession, sessionmaker, async_sessionmaker]):
        if isinstance(db, (Session, AsyncSession)):
            self.session_factory = None
            self._session = db
        else:
            self.session_factory = db
            self._session = None

    def _session_scope(self):
        if self.session_factory is None:
            return nullcontext()
        return operation_session(self.session_factory)

    @property
    def db(self) -> Union[Session, AsyncSession]:
        """The session of the running operation, or the Store's own session"""
        if self.session_factory is None:
            return self._session
        session = get_operation_session()
        if session is None:
            raise RuntimeError("No session outside a Store operation")
        return session

    @property
    def is_async(self) -> bool:
        return isinstance(self.db, AsyncSession)

    @property
    def tasks(self) -> TaskRepository:
        return TaskRepository(self.db)

    @property
    def categories(self) -> CategoryRepository:
        return CategoryRepository(self.db)

    @property
    def config(self) -> ConfigRepository:
        return ConfigRepository(self.db)

    @property
    def engine(self):
        """Engine behind the Store (sync Engine or AsyncEngine)"""
        if self.session_factory is not None:
            return self.session_factory.kw.get("bind")
        return self._session.bind

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

    async def close(self) -> None:
        """Close the Store's own session, or dispose the factory's engine"""
        if self.session_factory is None:
            if isinstance(self._session, AsyncSession):
                await self._session.close()
            else:
                self._session.close()
            return

        engine = self.engine
        if engine is None:
            return
        if isinstance(self.session_factory, async_sessionmaker):
            await engine.dispose()
        else:
            engine.dispose()

    # ---- schema ----

    @store_operation
    async def initialize(self) -> None:
        """
        Create missing tables and the default config row

        Idempotent: an existing config row (and its theme) is left alone.
        """
        await self.config.create_schema()
        inserted = await self.config.ensure_default_row()
        if inserted:
            logger.info("Initialized config with default theme")
        logger.info("Store initialized")

    # ---- tasks ----

    @store_operation
    async def list_tasks(self) -> List[TaskDict]:
        """Return all tasks with their category name (None when unset)"""
        return await self.tasks.list_tasks()

    @store_operation
    async def create_task(self, name: Any, description: Any, eta: Any) -> int:
        """
        Create a task without a category

        Raises:
            ValidationError: If name, description or eta is missing, not
                text, or empty

        Returns:
            Generated task id
        """
        name = _require_text("name", name)
        description = _require_text("description", description)
        eta = _require_text("eta", eta)

        task = await self.tasks.create_task(name=name, description=description, eta=eta)
        logger.info(f"Created task {task.id}")
        return task.id

    @store_operation
    async def update_task(
        self,
        task_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        eta: Optional[str] = None,
    ) -> None:
        """
        Apply a partial update to a task

        Arguments left as None keep their stored value. An empty string is a
        real value and is written.

        Raises:
            NotFoundError: If the task does not exist
        """
        supplied = {
            field_name: value
            for field_name, value in (("name", name), ("description", description), ("eta", eta))
            if value is not None
        }

        if not supplied:
            if await self.tasks.get_task_by_id(task_id) is None:
                raise NotFoundError(TASK_NOT_FOUND)
            logger.debug(f"No fields supplied for task {task_id}, nothing to update")
            return

        if not await self.tasks.update_task_fields(task_id, supplied):
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"Updated task {task_id} ({', '.join(sorted(supplied))})")

    @store_operation
    async def delete_task(self, task_id: int) -> None:
        """
        Delete a task. Categories are unaffected.

        Raises:
            NotFoundError: If the task does not exist
        """
        if not await self.tasks.delete_task(task_id):
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"Deleted task {task_id}")

    @store_operation
    async def assign_category(self, task_id: int, category_id: Optional[int]) -> None:
        """
        Point a task at an existing category

        The task is checked before the category.

        Raises:
            NotFoundError: "Task not found." or "Category not found."
        """
        if await self.tasks.get_task_by_id(task_id) is None:
            raise NotFoundError(TASK_NOT_FOUND)
        if category_id is None or await self.categories.get_category_by_id(category_id) is None:
            raise NotFoundError(CATEGORY_NOT_FOUND)

        if not await self.tasks.set_category(task_id, category_id):
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"Assigned category {category_id} to task {task_id}")

    # ---- categories ----

    @store_operation
    async def list_categories(self) -> List[CategoryDict]:
        """Return all categories"""
        categories = await self.categories.list_categories()
        return [category.to_dict() for category in categories]

    @store_operation
    async def get_category(self, category_id: int) -> str:
        """
        Return a category's name

        Raises:
            NotFoundError: If the category does not exist
        """
        category = await self.categories.get_category_by_id(category_id)
        if category is None:
            logger.debug(f"Category {category_id} not found")
            raise NotFoundError(CATEGORY_NOT_FOUND)
        return category.name

    @store_operation
    async def create_category(self, name: Any) -> int:
        """
        Create a category

        Raises:
            ValidationError: If name is missing, not text, or empty

        Returns:
            Generated category id
        """
        name = _require_text("name", name)
        category = await self.categories.create_category(name=name)
        logger.info(f"Created category {category.id}")
        return category.id

    @store_operation
    async def update_category(self, category_id: int, name: Any) -> None:
        """
        Rename a category

        Unlike create_category the name is not validated. A None name is
        still rejected by the database and the update is rolled back.

        Raises:
            NotFoundError: If the category does not exist
        """
        if not await self.categories.update_category_name(category_id, name):
            raise NotFoundError(CATEGORY_NOT_FOUND)
        logger.info(f"Updated category {category_id}")

    @store_operation
    async def delete_category(self, category_id: int) -> int:
        """
        Delete a category and clear it from every task that references it

        Raises:
            NotFoundError: If the category does not exist

        Returns:
            Number of tasks whose category was cleared
        """
        released = await self.categories.delete_category(category_id)
        if released is None:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        logger.info(f"Deleted category {category_id} (released {released} tasks)")
        return released

    # ---- theme ----

    @store_operation
    async def get_theme(self) -> str:
        """Return the current theme"""
        theme = await self.config.get_theme()
        if theme is None:
            # Only reachable when initialize() was never run
            raise RuntimeError("Config row is missing; call Store.initialize() first")
        return theme

    @store_operation
    async def set_theme(self, new_theme: Any) -> None:
        """
        Change the theme

        Raises:
            ValidationError: If new_theme is not one of the valid themes
        """
        if not Theme.is_valid(new_theme):
            raise ValidationError(INVALID_THEME)
        if not await self.config.set_theme(new_theme):
            raise RuntimeError("Config row is missing; call Store.initialize() first")
        logger.info(f"Theme changed to {new_theme}")
