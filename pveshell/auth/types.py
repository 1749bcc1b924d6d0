"""Typed values for authentication operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..exceptions import AuthError, ConfigurationError
from .constants import ERROR_HOST_REQUIRED, ERROR_PASSWORD_REQUIRED, ERROR_USERNAME_OR_TOKEN_REQUIRED

if TYPE_CHECKING:
    from ..client import PveClient


@dataclass(frozen=True)
class Credentials:
    """Login options as parsed from the command line."""

    host: str
    api_token: str | None = None
    username: str | None = None
    password: str | None = None

    def validate(self) -> None:
        """Check the option combination the CLI accepts.

        Raises:
            ConfigurationError: On a missing host, a missing token/username,
                or a username without a password.
        """
        if not self.host or not self.host.strip():
            raise ConfigurationError(ERROR_HOST_REQUIRED)
        if not self.api_token and not self.username:
            raise ConfigurationError(ERROR_USERNAME_OR_TOKEN_REQUIRED)
        if self.username and not self.password:
            raise ConfigurationError(ERROR_PASSWORD_REQUIRED)

    def __repr__(self) -> str:
        return (
            f"Credentials(host={self.host!r}, api_token={'***' if self.api_token else None}, "
            f"username={self.username!r}, password={'***' if self.password else None})"
        )


@dataclass
class AuthResult:
    """Result of an authentication attempt: a client or an AuthError."""

    success: bool
    client: PveClient | None = None
    error: AuthError | None = None

    @classmethod
    def ok(cls, client: PveClient) -> AuthResult:
        return cls(success=True, client=client)

    @classmethod
    def err(cls, error: AuthError) -> AuthResult:
        return cls(success=False, error=error)

    def unwrap(self) -> PveClient:
        """Return the authenticated client, or raise the stored AuthError."""
        if self.success and self.client is not None:
            return self.client
        raise self.error or AuthError("Authentication failed")
