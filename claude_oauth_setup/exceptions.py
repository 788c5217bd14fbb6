"""Exceptions raised by the credential store."""


class StorageError(Exception):
    """Base exception for storage-related errors."""

    pass


class CredentialsNotFoundError(StorageError):
    """Raised when the credentials file doesn't exist."""

    pass


class ValidationError(StorageError, ValueError):
    """Raised when credentials are malformed (e.g. non-numeric expiresAt)."""

    pass
