"""
Route handlers for the torsapi HTTP API

Each handler class serves one resource and delegates to the Store.
"""

from torsapi.api.routes.base import BaseRouteHandler
from torsapi.api.routes.tasks import TaskRoutes
from torsapi.api.routes.categories import CategoryRoutes
from torsapi.api.routes.theme import ThemeRoutes

__all__ = [
    "BaseRouteHandler",
    "TaskRoutes",
    "CategoryRoutes",
    "ThemeRoutes",
]
