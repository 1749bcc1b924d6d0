"""pveshell - Shell helpers for Proxmox VE command-line tools."""

from importlib.metadata import PackageNotFoundError, version

from .auth import AuthResolver, AuthResult, Credentials, PasswordResolver
from .client import PveClient, get_client_from_ha
from .exceptions import AuthError, ConfigurationError, DecryptionError, PveShellError

__all__ = [
    "AuthResolver",
    "AuthResult",
    "Credentials",
    "PasswordResolver",
    "PveClient",
    "get_client_from_ha",
    "PveShellError",
    "AuthError",
    "ConfigurationError",
    "DecryptionError",
]

try:
    __version__ = version("pveshell")
except PackageNotFoundError:
    __version__ = "0.1.0"
