"""CLI command modules."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from pveshell.auth import AuthResolver, Credentials, PasswordResolver, TerminalPasswordPrompt, resolve_password_key
from pveshell.client import PveClient
from pveshell.config import DEFAULT_TIMEOUT_SECONDS
from pveshell.exceptions import DecryptionError

_console = Console()


def build_password_resolver(confirmation: bool = False) -> PasswordResolver:
    """PasswordResolver keyed from PVESHELL_PASSWORD_KEY, prompting on the terminal."""
    return PasswordResolver(resolve_password_key(), TerminalPasswordPrompt(confirmation=confirmation))


def get_authenticated_client(credentials: Credentials, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> PveClient:
    """Get an authenticated PveClient, or exit with an error message."""
    result = AuthResolver(build_password_resolver(), timeout=timeout).resolve(credentials)

    if not result.success:
        _console.print(f"[red]{escape(str(result.error))}[/red]")
        cause = result.error.__cause__ if result.error else None
        if isinstance(cause, DecryptionError):
            _console.print(
                "[yellow]The password file cannot be decrypted. "
                "Delete it and run the command again to enter the password.[/yellow]"
            )
        elif cause is not None:
            _console.print(f"[dim]{escape(str(cause))}[/dim]")
        raise typer.Exit(1)

    return result.client
