"""
Database command: schema initialization
"""

import typer

from torsapi.cli.store_utils import run_store_operation

app = typer.Typer(name="db", help="Manage the database")


@app.command()
def init():
    """Create missing tables and the default config row (safe to repeat)."""

    async def _theme(store):
        return await store.get_theme()

    theme = run_store_operation(_theme)
    typer.echo(f"Database initialized (theme: {theme})")
