"""
CLI main entry point for torsapi
"""

import logging
import sys
import typer
from pathlib import Path
from torsapi.cli.commands import serve_app, db_app, tasks_app, categories_app, theme_app
from torsapi.core.utils.logger import get_logger, get_log_level_from_env, set_log_level

logger = get_logger(__name__)


def _load_env_file():
    """
    Load .env file from the working directory or next to the entry script

    Existing environment variables are never overridden.
    """
    from dotenv import load_dotenv

    possible_paths = [Path.cwd() / ".env"]
    if sys.argv and len(sys.argv) > 0:
        main_script = Path(sys.argv[0]).resolve()
        if main_script.is_file():
            possible_paths.append(main_script.parent / ".env")

    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.debug(f"Loaded environment from {env_path}")
            return


# Create Typer app
app = typer.Typer(
    name="torsapi",
    help="Tors Community task and category service CLI",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def cli_callback(ctx: typer.Context):
    _load_env_file()
    # Keep command output (tables, JSON) free of INFO logs
    set_log_level(get_log_level_from_env(default=logging.WARNING))
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


app.add_typer(serve_app, name="serve", help="Start API server")
app.add_typer(db_app, name="db", help="Manage the database")
app.add_typer(tasks_app, name="tasks", help="Manage and query tasks")
app.add_typer(categories_app, name="categories", help="Manage categories")
app.add_typer(theme_app, name="theme", help="Read or change the UI theme")


@app.command()
def version():
    """Show version information."""
    from torsapi import __version__
    typer.echo(f"torsapi version {__version__}")


if __name__ == "__main__":
    app()
