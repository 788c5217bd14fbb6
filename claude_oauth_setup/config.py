"""Config directory resolution for the credentials file."""

import os
from pathlib import Path
from typing import Mapping, Optional

# Environment variable that overrides the config root
CONFIG_HOME_ENV = "XDG_CONFIG_HOME"

# Default config directory name under the user's home
DEFAULT_DIR_NAME = ".claude"

# Subdirectory appended when an override root is in use
OVERRIDE_SUBDIR = "claude"

CREDENTIALS_FILENAME = ".credentials.json"


def config_root_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Read the config root override from the environment.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        The override root, or None if the variable is unset or empty
    """
    env = os.environ if environ is None else environ
    value = env.get(CONFIG_HOME_ENV)
    if not value:
        return None
    return Path(value)


def resolve_config_dir(config_root: Optional[Path] = None) -> Path:
    """Resolve the directory holding the credentials file.

    An override root gets a ``claude`` subdirectory appended, while the
    default ``~/.claude`` is used as-is. Keep the two cases asymmetric:
    existing installs read from exactly these locations.

    Args:
        config_root: Optional override root (e.g. the value of XDG_CONFIG_HOME)

    Returns:
        The config directory path
    """
    if config_root is not None:
        return Path(config_root) / OVERRIDE_SUBDIR
    return Path.home() / DEFAULT_DIR_NAME


def resolve_credentials_path(config_root: Optional[Path] = None) -> Path:
    """Resolve the full path of the credentials file."""
    return resolve_config_dir(config_root) / CREDENTIALS_FILENAME
