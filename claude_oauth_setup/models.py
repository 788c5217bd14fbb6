"""Claude OAuth credential data models."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from .exceptions import StorageError, ValidationError

# Top-level key of the credentials file
OAUTH_KEY = "claudeAiOauth"

# Scopes written on every save, regardless of what was granted
DEFAULT_SCOPES = ["user:inference", "user:profile"]

# expiresAt values at or above this are millisecond timestamps
MILLISECONDS_THRESHOLD = 10**11

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_expires_at(value: Union[str, int]) -> int:
    """Parse an expiresAt value as a base-10 integer.

    Args:
        value: Decimal text (e.g. "1234567890") or an int

    Returns:
        The integer timestamp

    Raises:
        ValidationError: If the value is not a base-10 integer
    """
    if isinstance(value, bool):
        raise ValidationError(f"expiresAt must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.fullmatch(text):
            return int(text, 10)
    raise ValidationError(f"expiresAt must be a base-10 integer, got {value!r}")


@dataclass
class OAuthCredentials:
    """Claude OAuth token bundle."""

    access_token: str
    refresh_token: str
    expires_at: int
    scopes: List[str] = field(default_factory=lambda: list(DEFAULT_SCOPES))

    def __post_init__(self) -> None:
        if not self.access_token:
            raise ValidationError("access token must not be empty")
        if not self.refresh_token:
            raise ValidationError("refresh token must not be empty")
        self.expires_at = parse_expires_at(self.expires_at)

    @classmethod
    def from_strings(
        cls, access_token: str, refresh_token: str, expires_at: Union[str, int]
    ) -> "OAuthCredentials":
        """Build credentials from the textual triple handed over by the caller.

        Scopes are always the fixed default set.
        """
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=parse_expires_at(expires_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the on-disk representation.

        The result has a single ``claudeAiOauth`` key. Scopes are always the
        default set so a save never carries over anything from a prior file.
        """
        return {
            OAUTH_KEY: {
                "accessToken": self.access_token,
                "refreshToken": self.refresh_token,
                "expiresAt": self.expires_at,
                "scopes": list(DEFAULT_SCOPES),
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthCredentials":
        """Parse the on-disk representation.

        Raises:
            StorageError: If the structure is not a credentials record
        """
        oauth = data.get(OAUTH_KEY) if isinstance(data, dict) else None
        if not isinstance(oauth, dict):
            raise StorageError(f"Invalid credentials file format: missing '{OAUTH_KEY}' object")

        missing = [k for k in ("accessToken", "refreshToken", "expiresAt") if k not in oauth]
        if missing:
            raise StorageError(f"Invalid credentials file format: missing {', '.join(missing)}")

        for key in ("accessToken", "refreshToken"):
            if not isinstance(oauth[key], str):
                raise StorageError(f"Invalid credentials file format: {key} must be a string")

        scopes = oauth.get("scopes")
        if not isinstance(scopes, list):
            scopes = list(DEFAULT_SCOPES)

        return cls(
            access_token=oauth["accessToken"],
            refresh_token=oauth["refreshToken"],
            expires_at=oauth["expiresAt"],
            scopes=[str(s) for s in scopes],
        )

    def expires_at_datetime(self) -> datetime:
        """Return the expiry as an aware UTC datetime.

        Timestamps at or above 10**11 are taken as milliseconds, smaller
        ones as seconds.

        Raises:
            StorageError: If the timestamp is outside the representable range
        """
        seconds = self.expires_at
        if seconds >= MILLISECONDS_THRESHOLD:
            seconds = seconds / 1000
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise StorageError(f"expiresAt {self.expires_at} is out of range: {e}") from e
