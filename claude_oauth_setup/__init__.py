"""claude-oauth-setup: write Claude OAuth credentials where the Claude CLI expects them.

Example usage:

    # Persist tokens handed over by a CI secret store
    from claude_oauth_setup import setup_oauth_credentials
    path = setup_oauth_credentials(
        access_token="sk-ant-oat01-...",
        refresh_token="sk-ant-ort01-...",
        expires_at="1735689600000",
    )

    # Read them back
    from claude_oauth_setup import load_oauth_credentials
    credentials = load_oauth_credentials()
    print(credentials.expires_at_datetime())
"""

__version__ = "0.1.0"

from pathlib import Path
from typing import Optional, Union

from .config import config_root_from_env, resolve_credentials_path
from .exceptions import CredentialsNotFoundError, StorageError, ValidationError
from .models import DEFAULT_SCOPES, OAuthCredentials
from .storage import CredentialStore


def _resolve_root(config_root: Optional[Path], use_env: bool) -> Optional[Path]:
    # An empty root means "no override", same as an empty XDG_CONFIG_HOME
    if config_root is not None and str(config_root) != "":
        return Path(config_root)
    if use_env:
        return config_root_from_env()
    return None


def setup_oauth_credentials(
    access_token: str,
    refresh_token: str,
    expires_at: Union[str, int],
    config_root: Optional[Path] = None,
    use_env: bool = True,
) -> Path:
    """Persist OAuth credentials to the credentials file.

    Args:
        access_token: OAuth access token
        refresh_token: OAuth refresh token
        expires_at: Expiry timestamp as decimal text or int
        config_root: Config root override. If None and use_env is True,
            XDG_CONFIG_HOME is consulted.
        use_env: Whether to read XDG_CONFIG_HOME when config_root is None

    Returns:
        Path of the written credentials file

    Raises:
        ValidationError: If expires_at is not a base-10 integer or a token is empty
        OSError: If the file cannot be written

    Example:
        >>> from claude_oauth_setup import setup_oauth_credentials
        >>> setup_oauth_credentials("a", "b", "1234567890")
        PosixPath('/home/me/.claude/.credentials.json')
    """
    credentials = OAuthCredentials.from_strings(access_token, refresh_token, expires_at)
    store = CredentialStore(_resolve_root(config_root, use_env))
    store.save(credentials)
    return store.credentials_file


def load_oauth_credentials(
    config_root: Optional[Path] = None, use_env: bool = True
) -> OAuthCredentials:
    """Load stored OAuth credentials.

    Raises:
        CredentialsNotFoundError: If no credentials file exists
        StorageError: If the file cannot be read or parsed
    """
    return CredentialStore(_resolve_root(config_root, use_env)).load()


def get_credentials_path(config_root: Optional[Path] = None, use_env: bool = True) -> Path:
    """Return the path the credentials file is (or would be) written to."""
    return resolve_credentials_path(_resolve_root(config_root, use_env))


# Public API exports
__all__ = [
    "__version__",
    "setup_oauth_credentials",
    "load_oauth_credentials",
    "get_credentials_path",
    "config_root_from_env",
    "CredentialStore",
    "OAuthCredentials",
    "DEFAULT_SCOPES",
    "StorageError",
    "CredentialsNotFoundError",
    "ValidationError",
]
