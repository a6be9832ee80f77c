"""
SQLAlchemy models for task, category and config storage
"""

from sqlalchemy import Column, Integer, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import declarative_base
from typing import Dict, Any
import os

from torsapi.core.types import Theme, DEFAULT_THEME, CONFIG_ROW_ID

Base = declarative_base()

# Table name configuration - supports environment variable override
# Default: no prefix ("tasks", "categories", "config")
# Can be overridden via TORSAPI_TABLE_PREFIX, e.g. "tors_" -> "tors_tasks"
TABLE_PREFIX = os.getenv("TORSAPI_TABLE_PREFIX", "")
TASK_TABLE_NAME = f"{TABLE_PREFIX}tasks"
CATEGORY_TABLE_NAME = f"{TABLE_PREFIX}categories"
CONFIG_TABLE_NAME = f"{TABLE_PREFIX}config"

_THEME_LIST_SQL = ", ".join(f"'{theme}'" for theme in Theme.all())


class CategoryModel(Base):
    """
    Category Model - a named grouping that tasks may reference

    Deleting a category never deletes tasks; their category_id is cleared
    instead (see CategoryRepository.delete_category).
    """
    __tablename__ = CATEGORY_TABLE_NAME
    # AUTOINCREMENT keeps SQLite from reusing the ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary"""
        return {
            "id": self.id,
            "name": self.name,
        }

    def __repr__(self):
        return f"<CategoryModel(id={self.id}, name='{self.name}')>"


class TaskModel(Base):
    """
    Task Model - a unit of work with an optional category reference

    category_id is only ever set through TaskRepository.assign_category, which
    requires the category to exist at that moment.
    """
    __tablename__ = TASK_TABLE_NAME
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    eta = Column(Text, nullable=False)  # Free-form estimate, never parsed
    category_id = Column(
        Integer,
        ForeignKey(f"{CATEGORY_TABLE_NAME}.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary (raw columns, category unresolved)"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "eta": self.eta,
            "category_id": self.category_id,
        }

    def __repr__(self):
        return f"<TaskModel(id={self.id}, name='{self.name}', category_id={self.category_id})>"


class ConfigModel(Base):
    """
    Config Model - the single row holding global UI preferences

    The row is inserted once by ConfigRepository.ensure_default_row and is
    only updated afterwards.
    """
    __tablename__ = CONFIG_TABLE_NAME
    __table_args__ = (
        CheckConstraint(f"id = {CONFIG_ROW_ID}", name=f"ck_{CONFIG_TABLE_NAME}_singleton"),
        CheckConstraint(f"theme IN ({_THEME_LIST_SQL})", name=f"ck_{CONFIG_TABLE_NAME}_theme"),
    )

    id = Column(Integer, primary_key=True, autoincrement=False, default=CONFIG_ROW_ID)
    theme = Column(Text, nullable=False, default=DEFAULT_THEME)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary"""
        return {
            "id": self.id,
            "theme": self.theme,
        }

    def __repr__(self):
        return f"<ConfigModel(id={self.id}, theme='{self.theme}')>"
