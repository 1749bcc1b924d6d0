"""Constants for pveshell authentication."""

from __future__ import annotations

# Prefix of a --password value that points at an encrypted password file
PASSWORD_FILE_PREFIX = "file:"

# Obfuscation key for password files, overridable through PVESHELL_PASSWORD_KEY.
# It ships with the tool, so files encrypted with it are not secret.
DEFAULT_PASSWORD_KEY = "012345678901234567890123"

# PBKDF2 parameters used to turn the key string into a Fernet key
KDF_SALT = b"pveshell-password-file"
KDF_ITERATIONS = 480000

PASSWORD_PROMPT = "Password"

# Error messages
ERROR_PROBLEM_CONNECTION = "Problem connection!"
ERROR_DECRYPT_FAILED = "Unable to decrypt password file"
ERROR_USERNAME_OR_TOKEN_REQUIRED = "Option '--username' or '--api-token' is required!"
ERROR_PASSWORD_REQUIRED = "Option '--password' is required!"
ERROR_HOST_REQUIRED = "Option '--host' is required!"
