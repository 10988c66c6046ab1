# tests/test_app.py
"""
Entry Point Tests - Unit Tests for Application Wiring

This module checks that the composition root builds the app around the
configured rates file and hands it to uvicorn with the configured address.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxrates.app (create_app, main)
- unittest.mock (Mock settings and patched server)
- pytest (testing framework)
"""
import logging  # Level constant for mocked settings

from unittest.mock import Mock, patch  # Mock settings and patch the server

from fxrates.app import create_app, main  # Composition root under test
from fxrates.adapters.persistence.file_store import RateFileStore  # Expected store type


def _mock_settings(tmp_path):
    mock_settings = Mock()
    mock_settings.rates_file = tmp_path / "rates.json"
    mock_settings.host = "127.0.0.1"
    mock_settings.port = 5055
    mock_settings.log_level_value = logging.INFO
    mock_settings.log_file = None
    mock_settings.log_dir = None
    mock_settings.log_stdout = True
    mock_settings.log_max_bytes = 1024
    mock_settings.log_backup_count = 1
    return mock_settings


class TestCreateApp:
    def test_store_uses_configured_file(self, tmp_path):
        with patch("fxrates.config.settings", _mock_settings(tmp_path)):
            app = create_app()

        assert isinstance(app.state.rate_store, RateFileStore)
        assert app.state.rate_store.path == tmp_path / "rates.json"


class TestMain:
    @patch("fxrates.app.uvicorn.run")
    @patch("fxrates.app.setup_logging")
    def test_serves_on_configured_address(self, mock_setup_logging, mock_run, tmp_path):
        with patch("fxrates.config.settings", _mock_settings(tmp_path)):
            main()

        mock_setup_logging.assert_called_once()
        assert mock_setup_logging.call_args.kwargs["level"] == logging.INFO
        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["host"] == "127.0.0.1"
        assert mock_run.call_args.kwargs["port"] == 5055
        assert mock_run.call_args.kwargs["log_config"] is None
