"""Pytest configuration and fixtures for claude-oauth-setup tests."""

import pytest
from pathlib import Path
from typing import Dict

from claude_oauth_setup.storage import CredentialStore


@pytest.fixture(autouse=True)
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the home directory and clear related env vars for every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", lambda: home)
    for var in (
        "XDG_CONFIG_HOME",
        "CLAUDE_ACCESS_TOKEN",
        "CLAUDE_REFRESH_TOKEN",
        "CLAUDE_EXPIRES_AT",
    ):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    """Provide a config root override that does not exist yet."""
    return tmp_path / "xdg-config"


@pytest.fixture
def temp_store(config_root: Path) -> CredentialStore:
    """Provide a CredentialStore writing under a temporary config root."""
    return CredentialStore(config_root=config_root)


@pytest.fixture
def sample_credentials() -> Dict[str, str]:
    """Provide credentials as the caller hands them over (all text)."""
    return {
        "access_token": "sk-ant-REDACTED",
        "refresh_token": "sk-ant-REDACTED",
        "expires_at": "1234567890",
    }
