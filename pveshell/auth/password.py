"""Password option resolution for pveshell.

A ``--password`` value of ``file:<path>`` points at a password file encrypted
with a configured key. The first run prompts for the password and writes the
file; later runs read it back without any interaction, which suits scheduled
jobs. The key ships with the tool, so this only keeps the plaintext off disk.
"""

from __future__ import annotations

import base64
import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..config import ENV_PASSWORD_KEY
from ..exceptions import DecryptionError
from .constants import (
    DEFAULT_PASSWORD_KEY,
    ERROR_DECRYPT_FAILED,
    KDF_ITERATIONS,
    KDF_SALT,
    PASSWORD_FILE_PREFIX,
    PASSWORD_PROMPT,
)

logger = logging.getLogger(__name__)


def resolve_password_key(key: str | None = None) -> str:
    """Resolve the password file key.

    Order: explicit parameter > PVESHELL_PASSWORD_KEY env var > embedded default.
    """
    if key:
        return key
    return os.environ.get(ENV_PASSWORD_KEY) or DEFAULT_PASSWORD_KEY


@lru_cache(maxsize=8)
def _derive_key(key: str) -> bytes:
    """Derive a Fernet key from the key string using PBKDF2."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=KDF_SALT,
        iterations=KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(key.encode()))


class PasswordCipher:
    """Symmetric encryption of a password into printable text."""

    def __init__(self, key: str) -> None:
        if not key:
            raise ValueError("Password key must not be empty")
        self._fernet = Fernet(_derive_key(key))

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, token: str) -> str:
        """Decrypt text produced by ``encrypt``.

        Raises:
            DecryptionError: If the key does not match or the content is corrupt.
        """
        try:
            return self._fernet.decrypt(token.strip().encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            raise DecryptionError(ERROR_DECRYPT_FAILED) from e


class PasswordPrompt(Protocol):
    """Source of a password typed by the user."""

    def ask(self, message: str) -> str: ...


class TerminalPasswordPrompt:
    """Ask on the terminal without echoing the input.

    With ``confirmation`` the password is asked twice and must match.
    """

    def __init__(self, confirmation: bool = False) -> None:
        self.confirmation = confirmation

    def ask(self, message: str) -> str:
        import typer

        return typer.prompt(message, hide_input=True, confirmation_prompt=self.confirmation)


def write_password_file(path: Path, content: str) -> None:
    """Write a password file atomically with owner-only permissions (0600)."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}_", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


class PasswordResolver:
    """Turn a ``--password`` option value into the plaintext password."""

    def __init__(self, key: str, prompt: PasswordPrompt | None = None) -> None:
        self._cipher = PasswordCipher(key)
        self._prompt = prompt or TerminalPasswordPrompt()

    def resolve(self, password_option: str | None) -> str | None:
        """Return the literal password, or the one stored behind ``file:<path>``.

        A missing password file is created from an interactive prompt.

        Raises:
            DecryptionError: If an existing password file cannot be decrypted.
        """
        if password_option is None or not password_option.strip():
            return password_option

        password = password_option.strip()
        if not password.startswith(PASSWORD_FILE_PREFIX):
            return password

        path = Path(password[len(PASSWORD_FILE_PREFIX):]).expanduser()
        if path.exists():
            logger.debug("Reading password from %s", path)
            return self._cipher.decrypt(path.read_text(encoding="utf-8"))

        password = self._prompt.ask(PASSWORD_PROMPT)
        write_password_file(path, self._cipher.encrypt(password))
        logger.debug("Stored encrypted password in %s", path)
        return password
