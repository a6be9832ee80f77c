"""
Theme command for reading and changing the UI theme
"""

import typer

from torsapi.cli.store_utils import run_store_operation
from torsapi.core.types import Theme

app = typer.Typer(name="theme", help="Read or change the UI theme")


@app.command()
def get():
    """Show the current theme."""

    async def _get(store):
        return await store.get_theme()

    typer.echo(run_store_operation(_get))


@app.command("set")
def set_theme(
    theme: str = typer.Argument(..., help=f"One of: {', '.join(Theme.all())}"),
):
    """Change the theme."""

    async def _set(store):
        await store.set_theme(theme)

    run_store_operation(_set)
    typer.echo(f"Theme changed to {theme}.")
