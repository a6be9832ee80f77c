"""
Serve command for starting API server
"""

import os
from typing import Optional

import typer
import uvicorn

from torsapi.api.main import DEFAULT_HOST, DEFAULT_PORT, get_api_key_from_env
from torsapi.core.utils.logger import get_logger, get_log_level_from_env, set_log_level

logger = get_logger(__name__)

app = typer.Typer(name="serve", help="Start API server", invoke_without_command=True)

APP_FACTORY = "torsapi.api.main:create_app_from_env"


def _start_server(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    reload: bool = False,
    api_key: Optional[str] = None,
    db_path: Optional[str] = None,
):
    """
    Internal function to start the API server

    Options are exported as environment variables so the app factory sees
    the same configuration in reload subprocesses.

    Args:
        host: Host address
        port: Port number
        reload: Enable auto-reload for development
        api_key: Shared secret (overrides TORSAPI_API_KEY)
        db_path: SQLite file (overrides TORSAPI_DB_PATH)
    """
    set_log_level(get_log_level_from_env())

    if api_key:
        os.environ["TORSAPI_API_KEY"] = api_key
    if db_path:
        os.environ["TORSAPI_DB_PATH"] = db_path

    if not get_api_key_from_env():
        typer.echo(
            "Warning: no API key configured (TORSAPI_API_KEY or --api-key); "
            "every request will fail with 500",
            err=True,
        )

    typer.echo(f"Starting API server on {host}:{port}")
    if reload:
        typer.echo("Auto-reload enabled (development mode)")

    try:
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=1,
            log_level="info",
        )
    except KeyboardInterrupt:
        typer.echo("\nServer stopped by user")
    except Exception as e:
        typer.echo(f"Error: {str(e)}", err=True)
        logger.exception("Error starting API server")
        raise typer.Exit(1)


@app.callback()
def serve_callback(
    ctx: typer.Context,
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind"),
    port: int = typer.Option(DEFAULT_PORT, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Shared secret for the api-key header"),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="SQLite database file"),
):
    """
    Start API server

    Examples:
        torsapi serve
        torsapi serve --port 3007 --api-key secret
        TORSAPI_API_KEY=secret torsapi serve start
    """
    if ctx.invoked_subcommand is None:
        _start_server(host=host, port=port, reload=reload, api_key=api_key, db_path=db_path)


@app.command()
def start(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind"),
    port: int = typer.Option(DEFAULT_PORT, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Shared secret for the api-key header"),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="SQLite database file"),
):
    """
    Start API server (subcommand - same as running 'serve' directly)
    """
    _start_server(host=host, port=port, reload=reload, api_key=api_key, db_path=db_path)
