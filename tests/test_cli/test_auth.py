"""Tests for CLI auth commands and global options."""

import json

from beepctl.cli.main import cli


class TestAuth:
    def test_set(self, run_cli, sample_config):
        result = run_cli("auth", "set", "new-token")
        assert result.exit_code == 0
        assert "Token saved" in result.output

        data = json.loads(sample_config.read_text())
        assert data["token"] == "new-token"
        assert "work" in data["aliases"]

    def test_show_masks_token(self, run_cli):
        result = run_cli("auth", "show")
        assert result.exit_code == 0
        assert "tok_1234...cdef" in result.output
        assert "tok_1234567890abcdef" not in result.output

    def test_show_env_token(self, run_cli, monkeypatch):
        monkeypatch.setenv("BEEPER_TOKEN", "from-env")
        result = run_cli("auth", "show")
        assert result.exit_code == 0
        assert "from BEEPER_TOKEN env" in result.output

    def test_show_default_url(self, run_cli, temp_dir):
        result = run_cli("auth", "show", config_path=temp_dir / "none.json")
        assert result.exit_code == 0
        assert "not set" in result.output
        assert "http://localhost:23373" in result.output
        assert "(default)" in result.output

    def test_clear_keeps_aliases(self, run_cli, sample_config):
        result = run_cli("auth", "clear")
        assert result.exit_code == 0
        assert "Token cleared" in result.output

        data = json.loads(sample_config.read_text())
        assert "token" not in data
        assert "baseUrl" not in data
        assert data["aliases"]["work"] == "!work:beeper.local"

    def test_clear_broken_file(self, run_cli, temp_dir):
        path = temp_dir / "broken.json"
        path.write_text("{oops")
        result = run_cli("auth", "clear", config_path=path)
        assert result.exit_code == 0
        assert json.loads(path.read_text()) == {}


class TestGlobalOptions:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("accounts", "alias", "chats", "messages", "reminders", "search", "send"):
            assert command in result.output

    def test_config_option(self, runner, temp_dir):
        path = temp_dir / "custom.json"
        result = runner.invoke(cli, ["--config", str(path), "auth", "set", "abc"])
        assert result.exit_code == 0
        assert json.loads(path.read_text()) == {"token": "abc"}

    def test_verbose_logs_requests(self, run_cli):
        result = run_cli("--verbose", "accounts")
        assert result.exit_code == 0
        assert "/v1/accounts" in result.output
