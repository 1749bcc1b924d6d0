"""Authentication utilities for pveshell."""

from .password import (
    PasswordCipher,
    PasswordPrompt,
    PasswordResolver,
    TerminalPasswordPrompt,
    resolve_password_key,
)
from .resolver import AuthResolver, client_try_login
from .types import AuthResult, Credentials

__all__ = [
    "AuthResolver",
    "AuthResult",
    "Credentials",
    "PasswordCipher",
    "PasswordPrompt",
    "PasswordResolver",
    "TerminalPasswordPrompt",
    "client_try_login",
    "resolve_password_key",
]
