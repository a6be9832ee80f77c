"""
Tasks command for managing and querying tasks
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from torsapi.cli.store_utils import run_store_operation

app = typer.Typer(name="tasks", help="Manage and query tasks")
console = Console()


@app.command("list")
def list_tasks(
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """List all tasks with their category."""

    async def _list(store):
        return await store.list_tasks()

    tasks = run_store_operation(_list)

    if as_json:
        typer.echo(json.dumps(tasks, indent=2, ensure_ascii=False))
        return

    table = Table(title="Tasks")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("ETA")
    table.add_column("Category")
    for task in tasks:
        table.add_row(
            str(task["id"]),
            task["name"],
            task["description"],
            task["eta"],
            task["category"] or "-",
        )
    console.print(table)


@app.command()
def create(
    name: str = typer.Argument(..., help="Task name"),
    description: str = typer.Argument(..., help="Task description"),
    eta: str = typer.Argument(..., help="Estimated time, free-form"),
):
    """Create a task."""

    async def _create(store):
        return await store.create_task(name, description, eta)

    task_id = run_store_operation(_create)
    typer.echo(f"Task created successfully! (id: {task_id})")


@app.command()
def update(
    task_id: int = typer.Argument(..., help="Task ID"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    description: Optional[str] = typer.Option(None, "--description", help="New description"),
    eta: Optional[str] = typer.Option(None, "--eta", help="New estimate"),
):
    """Update some fields of a task; omitted fields keep their value."""

    async def _update(store):
        await store.update_task(task_id, name=name, description=description, eta=eta)

    run_store_operation(_update)
    typer.echo("Task updated successfully!")


@app.command()
def delete(task_id: int = typer.Argument(..., help="Task ID")):
    """Delete a task."""

    async def _delete(store):
        await store.delete_task(task_id)

    run_store_operation(_delete)
    typer.echo("Task deleted successfully!")


@app.command()
def assign(
    task_id: int = typer.Argument(..., help="Task ID"),
    category_id: int = typer.Argument(..., help="Category ID"),
):
    """Assign an existing category to a task."""

    async def _assign(store):
        await store.assign_category(task_id, category_id)

    run_store_operation(_assign)
    typer.echo("Category assigned successfully!")
