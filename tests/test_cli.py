"""Tests for the claude-oauth-setup command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from claude_oauth_setup.cli import cli
from claude_oauth_setup.models import OAuthCredentials
from claude_oauth_setup.storage import CredentialStore


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestSetup:
    def test_setup_with_options(self, runner: CliRunner, fake_home: Path) -> None:
        result = runner.invoke(
            cli,
            ["setup", "--access-token", "a", "--refresh-token", "b", "--expires-at", "1234567890"],
        )

        assert result.exit_code == 0, result.output
        path = fake_home / ".claude" / ".credentials.json"
        assert str(path) in result.output
        assert json.loads(path.read_text())["claudeAiOauth"]["expiresAt"] == 1234567890

    def test_setup_from_environment(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that tokens and the config root are taken from the environment."""
        xdg = tmp_path / "xdg"
        result = runner.invoke(
            cli,
            ["setup"],
            env={
                "CLAUDE_ACCESS_TOKEN": "env-access",
                "CLAUDE_REFRESH_TOKEN": "env-refresh",
                "CLAUDE_EXPIRES_AT": "2222222222",
                "XDG_CONFIG_HOME": str(xdg),
            },
        )

        assert result.exit_code == 0, result.output
        oauth = json.loads((xdg / "claude" / ".credentials.json").read_text())["claudeAiOauth"]
        assert oauth["accessToken"] == "env-access"
        assert oauth["refreshToken"] == "env-refresh"

    def test_config_dir_option_wins_over_environment(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        explicit = tmp_path / "explicit"
        result = runner.invoke(
            cli,
            [
                "setup",
                "--access-token", "a",
                "--refresh-token", "b",
                "--expires-at", "1",
                "--config-dir", str(explicit),
            ],
            env={"XDG_CONFIG_HOME": str(tmp_path / "ignored")},
        )

        assert result.exit_code == 0, result.output
        assert (explicit / "claude" / ".credentials.json").exists()
        assert not (tmp_path / "ignored").exists()

    def test_setup_invalid_expires_at(self, runner: CliRunner, fake_home: Path) -> None:
        result = runner.invoke(
            cli,
            ["setup", "--access-token", "a", "--refresh-token", "b", "--expires-at", "soon"],
        )

        assert result.exit_code == 1
        assert "expiresAt" in result.output
        assert not (fake_home / ".claude" / ".credentials.json").exists()

    def test_setup_missing_token(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["setup", "--refresh-token", "b", "--expires-at", "1"])

        assert result.exit_code == 2
        assert "--access-token" in result.output


class TestShowPathDelete:
    def test_show(self, runner: CliRunner, fake_home: Path) -> None:
        CredentialStore().save(
            OAuthCredentials.from_strings("sk-ant-oat01-abcdefghijkl", "refresh", "1735689600000")
        )

        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 0, result.output
        assert "sk-ant-oat01..." in result.output
        assert "abcdefghijkl" not in result.output
        assert "2025-01-01T00:00:00+00:00" in result.output
        assert "EXPIRED" in result.output

    def test_show_missing(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 1
        assert "No credentials found" in result.output

    def test_show_out_of_range_expiry(self, runner: CliRunner) -> None:
        CredentialStore().save(OAuthCredentials.from_strings("a", "b", "99999999999999999999"))

        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "out of range" in result.output

    def test_show_non_string_token(self, runner: CliRunner, fake_home: Path) -> None:
        path = fake_home / ".claude" / ".credentials.json"
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps({"claudeAiOauth": {"accessToken": 123, "refreshToken": "b", "expiresAt": 1}})
        )

        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 1
        assert "accessToken must be a string" in result.output

    def test_path_default(self, runner: CliRunner, fake_home: Path) -> None:
        result = runner.invoke(cli, ["path"])

        assert result.output.strip() == str(fake_home / ".claude" / ".credentials.json")

    def test_path_with_xdg(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["path"], env={"XDG_CONFIG_HOME": str(tmp_path)})

        assert result.output.strip() == str(tmp_path / "claude" / ".credentials.json")

    def test_delete(self, runner: CliRunner, fake_home: Path) -> None:
        store = CredentialStore()
        store.save(OAuthCredentials.from_strings("a", "b", "1"))

        result = runner.invoke(cli, ["delete", "--yes"])

        assert result.exit_code == 0, result.output
        assert not store.exists()

    def test_delete_cancelled(self, runner: CliRunner) -> None:
        store = CredentialStore()
        store.save(OAuthCredentials.from_strings("a", "b", "1"))

        result = runner.invoke(cli, ["delete"], input="n\n")

        assert "Cancelled." in result.output
        assert store.exists()

    def test_delete_missing(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["delete", "--yes"])

        assert result.exit_code == 1
        assert "No credentials found" in result.output
