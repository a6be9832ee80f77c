"""
CLI commands for torsapi
"""

from torsapi.cli.commands.serve import app as serve_app
from torsapi.cli.commands.db import app as db_app
from torsapi.cli.commands.tasks import app as tasks_app
from torsapi.cli.commands.categories import app as categories_app
from torsapi.cli.commands.theme import app as theme_app

__all__ = [
    "serve_app",
    "db_app",
    "tasks_app",
    "categories_app",
    "theme_app",
]
