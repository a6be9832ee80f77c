"""
SQLAlchemy implementation of torsapi storage
"""

from torsapi.core.storage.sqlalchemy.models import (
    Base,
    TaskModel,
    CategoryModel,
    ConfigModel,
)
from torsapi.core.storage.sqlalchemy.task_repository import TaskRepository
from torsapi.core.storage.sqlalchemy.category_repository import CategoryRepository
from torsapi.core.storage.sqlalchemy.config_repository import ConfigRepository

__all__ = [
    "Base",
    "TaskModel",
    "CategoryModel",
    "ConfigModel",
    "TaskRepository",
    "CategoryRepository",
    "ConfigRepository",
]
