"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from types import SimpleNamespace
from unittest.mock import MagicMock, Mock, patch

import pytest
from typer.testing import CliRunner

from src.cli.main import __version__, _configure_logging, _exit_code_for, app
from src.cli.models import ExitCode
from src.lokalise_client.auth import Credentials
from src.lokalise_client.errors import (
    InvalidCredentialsError,
    RateLimitExceeded,
    RetryExhausted,
    TransferError,
)
from src.sync_tasks.errors import ConfigurationError, EntryProcessingError

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path, monkeypatch):
    """Run every command from an empty directory and reset the app logger."""
    monkeypatch.chdir(tmp_path)
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)


@pytest.fixture
def mock_auth():
    with patch('src.cli.main.Authenticator') as mock_authenticator:
        mock_authenticator.return_value.get_credentials.return_value = Credentials(
            api_token='token', project_id='123.abc'
        )
        yield mock_authenticator


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity,level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(verbosity)

            mock_get_logger.assert_any_call("src")
            mock_app_logger.setLevel.assert_called_with(level)

    def test_logdir_creates_log_file(self, tmp_path):
        logdir = tmp_path / "logs"

        _configure_logging(1, str(logdir))

        log_files = list(logdir.glob("lokalise-sync_*.log"))
        assert len(log_files) == 1


class TestExitCodeMapping:
    """Test cases for _exit_code_for."""

    def test_invalid_credentials(self):
        assert _exit_code_for(InvalidCredentialsError()) == ExitCode.AUTH_ERROR

    def test_retry_exhausted(self):
        error = RetryExhausted("upload en.yml", 5, RateLimitExceeded("upload en.yml"))
        assert _exit_code_for(error) == ExitCode.NETWORK_ERROR

    def test_unauthorized_status(self):
        original = Exception("Unauthorized")
        original.status_code = 401
        assert _exit_code_for(TransferError("upload", "Unauthorized", original)) == ExitCode.AUTH_ERROR

    def test_unauthorized_kind(self):
        Unauthorized = type('Unauthorized', (Exception,), {})
        error = TransferError("upload", "denied", Unauthorized("denied"))
        assert _exit_code_for(error) == ExitCode.AUTH_ERROR

    def test_other_transfer_error(self):
        error = TransferError("fetch bundle", "timed out", TimeoutError("timed out"))
        assert _exit_code_for(error) == ExitCode.NETWORK_ERROR

    def test_configuration_and_bundle_errors(self):
        assert _exit_code_for(ConfigurationError("API token is not set")) == ExitCode.GENERAL_ERROR
        assert _exit_code_for(EntryProcessingError("x.zip", "a.yml", "bad")) == ExitCode.GENERAL_ERROR


class TestGlobalOptions:
    """Test cases for the app callback."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"lokalise-sync version {__version__}" in result.output

    def test_no_arguments_shows_help(self):
        result = runner.invoke(app, [])

        assert "export" in result.output
        assert "import" in result.output


class TestExportCommand:
    """Test cases for the export command."""

    @patch('src.cli.main.Exporter')
    def test_export_success(self, mock_exporter, mock_auth, tmp_path):
        mock_exporter.return_value.export.return_value = [
            SimpleNamespace(process_id='p1', status='queued')
        ]

        result = runner.invoke(app, ["export", "--locales", str(tmp_path / "locales")])

        assert result.exit_code == ExitCode.SUCCESS
        config = mock_exporter.call_args[0][0]
        assert config.api_token == 'token'
        assert config.project_id == '123.abc'
        assert config.locales_path == (tmp_path / "locales").resolve()
        assert "Queued: 1 file(s)" in result.output

    @patch('src.cli.main.Exporter')
    def test_export_options_reach_config(self, mock_exporter, mock_auth):
        mock_exporter.return_value.export.return_value = []

        result = runner.invoke(app, [
            "export", "--project-id", "999.xyz", "--branch", "develop",
            "--max-retries", "2", "--skip", "*_draft.yml", "--skip", "*/tmp/*", "--silent",
        ])

        assert result.exit_code == ExitCode.SUCCESS
        config = mock_exporter.call_args[0][0]
        assert config.project_id_with_branch == "999.xyz:develop"
        assert config.max_retries_export == 2
        assert config.skip_file_export.patterns == ("*_draft.yml", "*/tmp/*")
        assert config.silent_mode is True
        assert "Export Summary" not in result.output

    @patch('src.cli.main.Exporter')
    def test_export_reads_config_file(self, mock_exporter, mock_auth, tmp_path):
        mock_exporter.return_value.export.return_value = []
        config_file = tmp_path / "sync.yaml"
        config_file.write_text("project_id: from-file\nmax_retries_export: 1\n")

        result = runner.invoke(app, ["export", "--config", str(config_file)])

        assert result.exit_code == ExitCode.SUCCESS
        config = mock_exporter.call_args[0][0]
        assert config.project_id == "from-file"
        assert config.max_retries_export == 1

    @patch('src.cli.main.Exporter')
    def test_missing_config_file(self, mock_exporter, mock_auth):
        result = runner.invoke(app, ["export", "--config", "missing.yaml"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "Configuration file not found" in result.output
        mock_exporter.assert_not_called()

    @pytest.mark.parametrize("error,exit_code,message", [
        (ConfigurationError("API token is not set", 'api_token'), ExitCode.GENERAL_ERROR, "API token is not set"),
        (RetryExhausted("upload en.yml", 5, RateLimitExceeded("upload en.yml")), ExitCode.NETWORK_ERROR, "Export failed"),
        (InvalidCredentialsError(), ExitCode.AUTH_ERROR, "Invalid Lokalise credentials"),
        (RuntimeError("boom"), ExitCode.GENERAL_ERROR, "Unexpected error: boom"),
    ])
    @patch('src.cli.main.Exporter')
    def test_export_failures(self, mock_exporter, mock_auth, error, exit_code, message):
        mock_exporter.return_value.export.side_effect = error

        result = runner.invoke(app, ["export"])

        assert result.exit_code == exit_code
        assert message in result.output


class TestImportCommand:
    """Test cases for the import command."""

    @patch('src.cli.main.Importer')
    def test_import_success(self, mock_importer, mock_auth):
        mock_importer.return_value.import_.return_value = True

        result = runner.invoke(app, ["import", "--branch", "develop"])

        assert result.exit_code == ExitCode.SUCCESS
        config = mock_importer.call_args[0][0]
        assert config.project_id_with_branch == "123.abc:develop"
        assert config.import_safe_mode is False
        assert "Translations imported" in result.output

    @patch('src.cli.main.Importer')
    def test_safe_mode_flags(self, mock_importer, mock_auth, tmp_path):
        mock_importer.return_value.import_.return_value = False
        (tmp_path / "sync.yaml").write_text("import_safe_mode: true\n")

        result = runner.invoke(app, ["import", "-c", "sync.yaml"])
        assert mock_importer.call_args[0][0].import_safe_mode is True
        assert result.exit_code == ExitCode.SUCCESS
        assert "Import cancelled" in result.output

        runner.invoke(app, ["import", "-c", "sync.yaml", "--no-safe-mode"])
        assert mock_importer.call_args[0][0].import_safe_mode is False

    @patch('src.cli.main.Importer')
    def test_max_retries_override(self, mock_importer, mock_auth):
        mock_importer.return_value.import_.return_value = True

        runner.invoke(app, ["import", "--max-retries", "0"])

        assert mock_importer.call_args[0][0].max_retries_import == 0

    @pytest.mark.parametrize("error,exit_code", [
        (TransferError("fetch bundle from http://x", "timed out", TimeoutError()), ExitCode.NETWORK_ERROR),
        (EntryProcessingError("trans.zip", "fail.yml", "bad tag"), ExitCode.GENERAL_ERROR),
    ])
    @patch('src.cli.main.Importer')
    def test_import_failures(self, mock_importer, mock_auth, error, exit_code):
        mock_importer.return_value.import_.side_effect = error

        result = runner.invoke(app, ["import"])

        assert result.exit_code == exit_code
        assert "Import failed" in result.output
