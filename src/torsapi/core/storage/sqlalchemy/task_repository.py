"""
Task repository for task database operations

This module provides a TaskRepository class that encapsulates all database
operations on the tasks table. The Store uses TaskRepository instead of
directly operating on the db session.
"""

from typing import List, Dict, Any, Optional
from sqlalchemy import select, update, delete
from torsapi.core.storage.sqlalchemy.base_repository import BaseRepository, is_storable_id
from torsapi.core.storage.sqlalchemy.models import TaskModel, CategoryModel
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

# Columns that update_task_fields may write
UPDATABLE_TASK_FIELDS = ("name", "description", "eta")


class TaskRepository(BaseRepository):
    """
    Task repository for database operations

    Provides methods for:
    - Creating, updating, and deleting tasks
    - Listing tasks with their resolved category name
    - Setting a task's category reference

    Lookups return None (or False for mutations) when the task does not
    exist; deciding what that means is left to the caller.

    Example:
        repo = TaskRepository(db)
        task = await repo.create_task(name="Fix roof", description="Leaks", eta="2d")
        await repo.set_category(task.id, category_id=1)
    """

    async def create_task(self, name: str, description: str, eta: str) -> TaskModel:
        """
        Create a new task with no category

        Args:
            name: Task name
            description: Task description
            eta: Free-form estimate

        Returns:
            Created TaskModel instance with its generated id
        """
        try:
            task = TaskModel(name=name, description=description, eta=eta, category_id=None)
            self.db.add(task)
            await self._commit()
            await self._refresh(task)
            logger.debug(f"Created task {task.id}")
            return task
        except Exception as e:
            logger.error(f"Error creating task: {str(e)}")
            await self._rollback()
            raise

    async def get_task_by_id(self, task_id: int) -> Optional[TaskModel]:
        """
        Get a task by ID

        Args:
            task_id: Task ID

        Returns:
            TaskModel instance or None if not found
        """
        try:
            return await self._get_by_id(TaskModel, task_id)
        except Exception as e:
            logger.error(f"Error getting task {task_id}: {str(e)}")
            raise

    async def list_tasks(self) -> List[Dict[str, Any]]:
        """
        List all tasks in id order with the category name resolved

        A task whose category_id is null, or does not resolve, has
        category None.

        Returns:
            List of {id, name, description, eta, category} dictionaries
        """
        stmt = (
            select(
                TaskModel.id,
                TaskModel.name,
                TaskModel.description,
                TaskModel.eta,
                CategoryModel.name.label("category"),
            )
            .outerjoin(CategoryModel, TaskModel.category_id == CategoryModel.id)
            .order_by(TaskModel.id)
        )
        result = await self._execute(stmt)
        return [dict(row._mapping) for row in result.all()]

    async def update_task_fields(self, task_id: int, fields: Dict[str, Any]) -> bool:
        """
        Update the given columns of a task, leaving the others untouched

        Args:
            task_id: Task ID
            fields: Mapping of column name to new value. Only name,
                description and eta are accepted.

        Returns:
            True if successful, False if task not found

        Raises:
            ValueError: If fields names a column that cannot be updated
        """
        unknown = set(fields) - set(UPDATABLE_TASK_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update task fields: {sorted(unknown)}")

        try:
            task = await self.get_task_by_id(task_id)
            if not task:
                return False

            for field_name, value in fields.items():
                setattr(task, field_name, value)

            await self._commit()
            logger.debug(f"Updated fields {sorted(fields)} for task {task_id}")
            return True

        except Exception as e:
            logger.error(f"Error updating task {task_id}: {str(e)}")
            await self._rollback()
            raise

    async def set_category(self, task_id: int, category_id: Optional[int]) -> bool:
        """
        Set (or clear, with None) a task's category reference

        The caller is responsible for checking that the category exists.

        Args:
            task_id: Task ID
            category_id: Category ID or None

        Returns:
            True if successful, False if task not found
        """
        if not is_storable_id(task_id):
            return False

        try:
            stmt = (
                update(TaskModel)
                .where(TaskModel.id == task_id)
                .values(category_id=category_id)
            )
            result = await self._execute(stmt)
            if result.rowcount == 0:
                await self._rollback()
                return False
            await self._commit()
            logger.debug(f"Set category of task {task_id} to {category_id}")
            return True

        except Exception as e:
            logger.error(f"Error setting category for task {task_id}: {str(e)}")
            await self._rollback()
            raise

    async def delete_task(self, task_id: int) -> bool:
        """
        Physically delete a task from the database

        Args:
            task_id: Task ID to delete

        Returns:
            True if successful, False if task not found
        """
        if not is_storable_id(task_id):
            return False

        try:
            stmt = delete(TaskModel).where(TaskModel.id == task_id)
            result = await self._execute(stmt)
            if result.rowcount == 0:
                await self._rollback()
                return False
            await self._commit()
            logger.debug(f"Physically deleted task {task_id}")
            return True

        except Exception as e:
            logger.error(f"Error deleting task {task_id}: {str(e)}")
            await self._rollback()
            raise
