# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Tests for the tmuxmcp command line."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tmuxmcp.cli import cli
from tmuxmcp.host_config import reset_config_cache
from tmuxmcp.utils.exceptions import TmuxServerNotRunningError


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv("TMUXMCP_CONFIG", str(tmp_path / "config.yml"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture
def runner():
    return CliRunner()


class TestCheck:
    """Tests for `tmuxmcp check`."""

    @patch("shutil.which")
    def test_missing_tmux(self, mock_which, runner):
        mock_which.return_value = None

        result = runner.invoke(cli, ["check"])

        assert result.exit_code != 0
        assert "install tmux" in result.output

    @patch("subprocess.run")
    @patch("shutil.which")
    def test_tmux_present(self, mock_which, mock_run, runner):
        mock_which.return_value = "/usr/bin/tmux"
        mock_run.return_value.stdout = "tmux 3.4\n"

        result = runner.invoke(cli, ["check"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == ["/usr/bin/tmux", "-V"]


class TestServe:
    """Tests for `tmuxmcp serve` startup checks."""

    @patch("shutil.which")
    def test_serve_fails_without_tmux(self, mock_which, runner):
        """The tmux check happens before any server is built."""
        mock_which.return_value = None

        with patch("tmuxmcp.server.create_server") as mock_create:
            result = runner.invoke(cli, ["serve"])

        assert result.exit_code != 0
        assert "not found in PATH" in result.output
        mock_create.assert_not_called()

    def test_bad_config(self, runner, tmp_path):
        config_path = tmp_path / "broken.yml"
        config_path.write_text("server: {port: nope}\n")

        result = runner.invoke(cli, ["serve", "--config", str(config_path)])

        assert result.exit_code != 0
        assert "server.port" in result.output


class TestSessions:
    """Tests for `tmuxmcp sessions`."""

    @patch("tmuxmcp.core.tmux.TmuxHost.list_sessions")
    def test_lists(self, mock_list, runner):
        mock_list.return_value = "demo: 1 windows\n"

        result = runner.invoke(cli, ["sessions"])

        assert result.exit_code == 0
        assert result.output == "demo: 1 windows\n"

    @patch("tmuxmcp.core.tmux.TmuxHost.list_sessions")
    def test_no_server(self, mock_list, runner):
        mock_list.side_effect = TmuxServerNotRunningError("failed to list sessions: no server running")

        result = runner.invoke(cli, ["sessions"])

        assert result.exit_code != 0
        assert "no server running" in result.output
