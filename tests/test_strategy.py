"""Tests for transfer strategy selection."""

from unittest.mock import patch

import pytest

from ldpmirror.config import TransferConfig
from ldpmirror.transfer import (
    ExportStrategy,
    ImportStrategy,
    create_client,
    select_strategy,
)

URI = "http://localhost:8080/rest"


@pytest.fixture
def export_config():
    return TransferConfig.from_options(
        mode="export", resource=URI, desc_dir="rdf", user="admin:secret", retries=1
    )


@pytest.fixture
def import_config():
    return TransferConfig.from_options(mode="import", resource=URI, desc_dir="rdf")


class TestSelectStrategy:
    """Tests for select_strategy."""

    def test_export(self, export_config):
        strategy = select_strategy(export_config)
        assert isinstance(strategy, ExportStrategy)
        assert strategy.config is export_config

    def test_import(self, import_config):
        assert isinstance(select_strategy(import_config), ImportStrategy)

    @patch("ldpmirror.transfer.strategy.Exporter")
    def test_export_runs_exporter(
        self, mock_exporter, export_config, mock_client, mock_output
    ):
        mock_exporter.return_value.export.return_value = {"descriptions": 1}

        stats = ExportStrategy(export_config).run(mock_client, mock_output)

        mock_exporter.assert_called_once_with(mock_client, export_config, mock_output)
        mock_exporter.return_value.export.assert_called_once_with(URI)
        assert stats == {"descriptions": 1}

    @patch("ldpmirror.transfer.strategy.Importer")
    def test_import_runs_importer(
        self, mock_importer, import_config, mock_client, mock_output
    ):
        ImportStrategy(import_config).run(mock_client, mock_output)

        mock_importer.assert_called_once_with(mock_client, import_config, mock_output)
        mock_importer.return_value.import_.assert_called_once_with(URI)


class TestCreateClient:
    """Tests for create_client."""

    def test_credentials_and_retries(self, export_config):
        client = create_client(export_config)

        assert client.user == "admin"
        assert client.password == "secret"
        assert client.max_retries == 1
