"""Tests for the opslevel-sync console entry point."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from opslevel_sync import __version__, main
from opslevel_sync.settings import ENV_CONFIG_FILE


class TestMain:
    @patch("opslevel_sync.logging.basicConfig")
    @patch("opslevel_sync.server.mcp")
    def test_runs_stdio_server(self, mock_mcp, mock_logging):
        main([])

        mock_mcp.run.assert_called_once_with(transport="stdio")
        assert mock_logging.call_args.kwargs["level"] == 30

    @patch("opslevel_sync.logging.basicConfig")
    @patch("opslevel_sync.server.mcp")
    def test_config_flag_exported_for_lifespan(self, mock_mcp, mock_logging, monkeypatch):
        monkeypatch.setenv(ENV_CONFIG_FILE, "unused.yaml")

        main(["--config", "/etc/opslevel/app-config.yaml", "--log-level", "DEBUG"])

        assert os.environ[ENV_CONFIG_FILE] == "/etc/opslevel/app-config.yaml"
        assert mock_logging.call_args.kwargs["level"] == 10

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_rejects_unknown_log_level(self):
        with pytest.raises(SystemExit):
            main(["--log-level", "LOUD"])
