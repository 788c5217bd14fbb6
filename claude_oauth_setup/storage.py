"""Claude OAuth credentials storage in a JSON file under the config directory."""

import json
import logging
import os
import stat
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import resolve_credentials_path
from .exceptions import CredentialsNotFoundError, StorageError
from .models import OAuthCredentials

logger = logging.getLogger(__name__)


class CredentialStore:
    """Manage the Claude OAuth credentials file.

    The store never reads the environment itself; callers resolve the
    config root (see ``config.config_root_from_env``) and pass it in.
    """

    def __init__(self, config_root: Optional[Path] = None):
        """Initialize the credential store.

        Args:
            config_root: Optional config root override. When given, credentials
                live in <config_root>/claude/.credentials.json; otherwise in
                ~/.claude/.credentials.json.
        """
        self.config_root = Path(config_root) if config_root is not None else None

    @property
    def credentials_file(self) -> Path:
        """Path of the credentials file, resolved fresh on every access."""
        return resolve_credentials_path(self.config_root)

    def save(self, credentials: OAuthCredentials) -> None:
        """Write credentials to disk, replacing any existing file.

        The record is written to a temporary file in the same directory and
        renamed over the target, so an interrupted write leaves the previous
        file untouched.

        Args:
            credentials: Credentials to persist

        Raises:
            OSError: If the directory cannot be created or the file cannot be written
        """
        path = self.credentials_file
        path.parent.mkdir(parents=True, exist_ok=True)

        content = json.dumps(credentials.to_dict(), indent=2)

        fd, temp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f"{path.name}.", suffix=".tmp"
        )
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if os.name != "nt":
                os.chmod(temp_path, stat.S_IRUSR | stat.S_IWUSR)
            os.replace(temp_path, path)
        except BaseException:
            if temp_path.exists():
                temp_path.unlink()
            raise

        logger.debug("Wrote credentials to %s", path)

    def load(self) -> OAuthCredentials:
        """Load credentials from disk.

        Returns:
            The stored credentials

        Raises:
            CredentialsNotFoundError: If the credentials file doesn't exist
            StorageError: If the file cannot be read or parsed
        """
        path = self.credentials_file
        if not path.exists():
            raise CredentialsNotFoundError(
                f"No credentials found at {path}. Run 'claude-oauth-setup setup' first."
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Failed to parse credentials file: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read credentials file: {e}") from e

        return OAuthCredentials.from_dict(data)

    def exists(self) -> bool:
        """Check if the credentials file exists."""
        return self.credentials_file.exists()

    def delete(self) -> None:
        """Delete the credentials file.

        Raises:
            CredentialsNotFoundError: If the credentials file doesn't exist
        """
        path = self.credentials_file
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise CredentialsNotFoundError(f"No credentials found at {path}.") from e

        logger.debug("Deleted credentials file %s", path)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the stored access token has expired.

        Args:
            now: Reference time (default: current UTC time). Naive values
                are taken as UTC.

        Returns:
            True if expired, False if still valid

        Raises:
            CredentialsNotFoundError: If the credentials file doesn't exist
            StorageError: If the file is invalid or expiresAt is out of range
        """
        credentials = self.load()
        reference = now or datetime.now(timezone.utc)
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)
        return reference >= credentials.expires_at_datetime()
