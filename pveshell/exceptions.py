"""Custom exceptions raised by pveshell."""

from __future__ import annotations

from typing import Any, Optional


class PveShellError(Exception):
    """Base exception for all pveshell specific failures."""


class ConfigurationError(PveShellError):
    """Raised when the supplied credential options do not form a valid combination."""


class AuthError(PveShellError):
    """Raised when neither the API token nor the username/password login succeeded."""


class DecryptionError(PveShellError):
    """Raised when a stored password file cannot be decrypted with the configured key."""


class HostUnreachableError(PveShellError):
    """Raised when no host of a high-availability list accepts a connection."""


class UpdateError(PveShellError):
    """Raised when the release lookup or the download of an upgrade fails."""


class APIError(PveShellError):
    """Raised when the Proxmox VE API returns a non-successful response."""

    def __init__(self, message: str, status_code: int, response: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:  # pragma: no cover - repr helper
        return f"{self.status_code}: {self.message}"
