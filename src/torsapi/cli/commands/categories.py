"""
Categories command for managing categories
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from torsapi.cli.store_utils import run_store_operation

app = typer.Typer(name="categories", help="Manage categories")
console = Console()


@app.command("list")
def list_categories(
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """List all categories."""

    async def _list(store):
        return await store.list_categories()

    categories = run_store_operation(_list)

    if as_json:
        typer.echo(json.dumps(categories, indent=2, ensure_ascii=False))
        return

    table = Table(title="Categories")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    for category in categories:
        table.add_row(str(category["id"]), category["name"])
    console.print(table)


@app.command()
def create(name: str = typer.Argument(..., help="Category name")):
    """Create a category."""

    async def _create(store):
        return await store.create_category(name)

    category_id = run_store_operation(_create)
    typer.echo(f"Category created successfully! (id: {category_id})")


@app.command()
def rename(
    category_id: int = typer.Argument(..., help="Category ID"),
    name: str = typer.Argument(..., help="New name"),
):
    """Rename a category."""

    async def _rename(store):
        await store.update_category(category_id, name)

    run_store_operation(_rename)
    typer.echo("Category updated successfully!")


@app.command()
def delete(category_id: int = typer.Argument(..., help="Category ID")):
    """Delete a category; its tasks are kept without a category."""

    async def _delete(store):
        return await store.delete_category(category_id)

    released = run_store_operation(_delete)
    typer.echo(f"Category deleted successfully! ({released} tasks released)")
