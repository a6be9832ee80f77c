"""
Test CLI serve command functionality
"""

import os
from unittest.mock import patch
from typer.testing import CliRunner
from torsapi.cli.main import app

runner = CliRunner()


class TestServeCommand:
    """Test cases for serve command"""

    def test_serve_help(self):
        """Test serve command help"""
        result = runner.invoke(app, ["serve", "--help"])
        assert result.exit_code == 0
        assert "Start API server" in result.stdout
        assert "--port" in result.stdout

    def test_serve_start_subcommand_help(self):
        result = runner.invoke(app, ["serve", "start", "--help"])
        assert result.exit_code == 0
        assert "--api-key" in result.stdout

    def test_serve_runs_uvicorn_with_app_factory(self):
        with patch("torsapi.cli.commands.serve.uvicorn.run") as mock_run, \
                patch.dict(os.environ, {"TORSAPI_API_KEY": "secret"}):
            result = runner.invoke(app, ["serve", "--port", "4010", "--host", "127.0.0.1"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == "torsapi.api.main:create_app_from_env"
        assert kwargs["factory"] is True
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 4010
        assert kwargs["reload"] is False

    def test_serve_options_are_exported(self, tmp_path):
        db_path = str(tmp_path / "serve.db")
        with patch("torsapi.cli.commands.serve.uvicorn.run"), patch.dict(os.environ, {}):
            result = runner.invoke(
                app, ["serve", "start", "--api-key", "from-cli", "--db-path", db_path]
            )
            assert result.exit_code == 0
            assert os.environ["TORSAPI_API_KEY"] == "from-cli"
            assert os.environ["TORSAPI_DB_PATH"] == db_path

    def test_serve_warns_without_api_key(self):
        with patch("torsapi.cli.commands.serve.uvicorn.run"), patch.dict(os.environ, {}, clear=True):
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        assert "no API key configured" in result.output
