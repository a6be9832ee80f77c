"""
Category repository for category database operations
"""

from typing import List, Optional
from sqlalchemy import select, update, delete
from torsapi.core.storage.sqlalchemy.base_repository import BaseRepository, is_storable_id
from torsapi.core.storage.sqlalchemy.models import CategoryModel, TaskModel
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)


class CategoryRepository(BaseRepository):
    """
    Category repository for database operations

    delete_category releases every task that references the category in
    the same transaction as the delete, so no task is ever left pointing at
    a missing category.
    """

    async def create_category(self, name: str) -> CategoryModel:
        """
        Create a new category

        Args:
            name: Category name

        Returns:
            Created CategoryModel instance with its generated id
        """
        try:
            category = CategoryModel(name=name)
            self.db.add(category)
            await self._commit()
            await self._refresh(category)
            logger.debug(f"Created category {category.id}")
            return category
        except Exception as e:
            logger.error(f"Error creating category: {str(e)}")
            await self._rollback()
            raise

    async def get_category_by_id(self, category_id: int) -> Optional[CategoryModel]:
        """
        Get a category by ID

        Returns:
            CategoryModel instance or None if not found
        """
        return await self._get_by_id(CategoryModel, category_id)

    async def list_categories(self) -> List[CategoryModel]:
        """List all categories in id order"""
        stmt = (
            select(CategoryModel)
            .order_by(CategoryModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def update_category_name(self, category_id: int, name: Optional[str]) -> bool:
        """
        Update category name

        No validation is applied to name; the NOT NULL column still
        rejects None.

        Returns:
            True if successful, False if category not found
        """
        try:
            category = await self.get_category_by_id(category_id)
            if not category:
                return False

            category.name = name
            await self._commit()
            logger.debug(f"Updated name for category {category_id}")
            return True

        except Exception as e:
            logger.error(f"Error updating category name for {category_id}: {str(e)}")
            await self._rollback()
            raise

    async def delete_category(self, category_id: int) -> Optional[int]:
        """
        Delete a category and clear every task reference to it

        Both statements run in one transaction: either the category is gone
        and no task references it, or nothing changed.

        Args:
            category_id: Category ID to delete

        Returns:
            Number of tasks whose category_id was cleared, or None if the
            category does not exist
        """
        if not is_storable_id(category_id):
            return None

        try:
            released = await self._execute(
                update(TaskModel)
                .where(TaskModel.category_id == category_id)
                .values(category_id=None)
            )
            deleted = await self._execute(
                delete(CategoryModel).where(CategoryModel.id == category_id)
            )
            if deleted.rowcount == 0:
                await self._rollback()
                return None

            await self._commit()
            logger.debug(
                f"Deleted category {category_id}, released {released.rowcount} tasks"
            )
            return released.rowcount

        except Exception as e:
            logger.error(f"Error deleting category {category_id}: {str(e)}")
            await self._rollback()
            raise
