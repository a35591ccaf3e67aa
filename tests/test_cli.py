"""Unit tests for the ldpmirror command line."""

from unittest.mock import ANY, patch

import pytest
from click.testing import CliRunner

from ldpmirror.cli import build_config, main
from ldpmirror.config import TransferMode
from ldpmirror.exceptions import ConfigurationError, ResourceNotFoundError

URI = "http://localhost/rest"


@pytest.fixture
def runner():
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_select():
    with patch("ldpmirror.cli.select_strategy") as mock:
        yield mock


@pytest.fixture
def mock_create_client():
    with patch("ldpmirror.cli.create_client") as mock:
        yield mock


def selected_config(mock_select):
    return mock_select.call_args[0][0]


class TestMain:
    """Tests for the ldpmirror command."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--mode" in result.output
        assert "--desc-dir" in result.output
        assert "--bin-dir" in result.output

    def test_missing_options_exit_2(self, runner, mock_select):
        result = runner.invoke(main, ["-r", URI, "-d", "rdf"])

        assert result.exit_code == 2
        assert "Missing required option: mode" in result.output
        mock_select.assert_not_called()

    def test_invalid_mode(self, runner, mock_select):
        result = runner.invoke(main, ["-m", "sync", "-r", URI, "-d", "rdf"])
        assert result.exit_code == 2

    def test_export_success(self, runner, mock_select, mock_create_client):
        result = runner.invoke(
            main, ["-m", "export", "-r", URI, "-d", "rdf", "-b", "bin", "-q"]
        )

        assert result.exit_code == 0
        config = selected_config(mock_select)
        assert config.mode is TransferMode.EXPORT
        assert config.resource == URI
        mock_select.return_value.run.assert_called_once_with(
            mock_create_client.return_value, ANY
        )
        mock_create_client.return_value.close.assert_called_once()

    def test_status_failure_exit_1(self, runner, mock_select, mock_create_client):
        mock_select.return_value.run.side_effect = ResourceNotFoundError(f"{URI}/1")

        result = runner.invoke(main, ["-m", "export", "-r", URI, "-d", "rdf"])

        assert result.exit_code == 1
        assert "Resource not found" in result.output
        mock_create_client.return_value.close.assert_called_once()

    def test_configuration_failure_during_run_exit_2(
        self, runner, mock_select, mock_create_client
    ):
        mock_select.return_value.run.side_effect = ConfigurationError(
            "Description directory does not exist: rdf"
        )

        result = runner.invoke(main, ["-m", "import", "-r", URI, "-d", "rdf"])

        assert result.exit_code == 2

    def test_continue_on_error_flag(self, runner, mock_select, mock_create_client):
        runner.invoke(
            main, ["-m", "export", "-r", URI, "-d", "rdf", "--continue-on-error"]
        )
        assert selected_config(mock_select).continue_on_error

    def test_user_from_environment(self, runner, mock_select, mock_create_client):
        runner.invoke(
            main,
            ["-m", "export", "-r", URI, "-d", "rdf"],
            env={"LDPMIRROR_USER": "admin:secret"},
        )

        config = selected_config(mock_select)
        assert config.user == "admin"
        assert config.password == "secret"

    def test_config_file(self, runner, mock_select, mock_create_client, tmp_path):
        config_file = tmp_path / "ldpmirror.yaml"
        config_file.write_text(
            f"mode: import\nresource: {URI}\ndesc_dir: rdf\nrdf_ext: .jsonld\n"
        )

        result = runner.invoke(
            main, ["-c", str(config_file), "-r", f"{URI}/sub", "-q"]
        )

        assert result.exit_code == 0
        config = selected_config(mock_select)
        assert config.mode is TransferMode.IMPORT
        assert config.resource == f"{URI}/sub"
        assert config.rdf_extension == ".jsonld"


class TestBuildConfig:
    """Tests for build_config."""

    def test_cli_values_override_file(self, tmp_path):
        config_file = tmp_path / "c.yaml"
        config_file.write_text(
            f"mode: export\nresource: {URI}\ndesc_dir: a\ncontinue_on_error: true\n"
        )

        config = build_config(
            config_file,
            {"desc_dir": "b", "bin_dir": None, "continue_on_error": False},
        )

        assert str(config.description_dir) == "b"
        assert config.binary_dir is None
        assert config.continue_on_error

    def test_without_file(self):
        config = build_config(
            None, {"mode": "export", "resource": URI, "desc_dir": "rdf"}
        )
        assert config.mode is TransferMode.EXPORT
