"""
Core type definitions for torsapi

Shared constants that the storage, store and API layers all refer to.
"""

from typing import Any, Optional, TypedDict


# ============================================================================
# Theme Constants
# ============================================================================

class Theme:
    """
    UI theme constants

    The config row's theme is always one of these values. Use the constants
    instead of magic strings.
    """

    DESERT = "Desert"
    OASIS = "Oasis"
    FOREST = "Forest"
    SNOW = "Snow"

    @classmethod
    def all(cls) -> tuple[str, ...]:
        """Return every valid theme in declaration order"""
        return (cls.DESERT, cls.OASIS, cls.FOREST, cls.SNOW)

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Return True if value is one of the valid themes (case-sensitive)"""
        return isinstance(value, str) and value in cls.all()


DEFAULT_THEME = Theme.DESERT

CONFIG_ROW_ID = 1
"""The config table holds exactly one row and this is its id"""


# ============================================================================
# Serialized shapes
# ============================================================================

class TaskDict(TypedDict):
    """A task as returned by Store.list_tasks and GET /tasks"""

    id: int
    name: str
    description: str
    eta: str
    category: Optional[str]


class CategoryDict(TypedDict):
    """A category as returned by Store.list_categories and GET /categories"""

    id: int
    name: str
