"""Authentication commands for the pveshell CLI."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pveshell.auth.constants import PASSWORD_FILE_PREFIX
from pveshell.cli.commands import build_password_resolver, get_authenticated_client
from pveshell.cli.options import (
    api_token_option,
    debug_option,
    dry_run_option,
    host_option,
    login_credentials,
    merge_global_options,
    password_option,
    timeout_option,
    username_option,
)

app = typer.Typer(help="Verify credentials and manage password files")
console = Console()


@app.command()
def login(
    ctx: typer.Context,
    host: str = host_option(),
    api_token: str = api_token_option(),
    username: str = username_option(),
    password: str = password_option(),
    timeout: int = timeout_option(),
    debug: bool = debug_option(),
    dry_run: bool = dry_run_option(),
) -> None:
    """Log in to the cluster and show its version.

    With --password file:PATH the password is asked once and stored encrypted.
    """
    merge_global_options(ctx, debug, dry_run)
    credentials = login_credentials(ctx, host, api_token, username, password)
    client = get_authenticated_client(credentials, timeout=timeout)

    try:
        result = client.version()

        console.print("[green]Login successful[/green]")
        console.print(f"  Host: {client.host}:{client.port}")
        if result.is_success_status_code and isinstance(result.data, dict):
            console.print(f"  Version: {result.data.get('version', 'N/A')}")
            if result.data.get("release"):
                console.print(f"  Release: {result.data['release']}")
    finally:
        client.close()


@app.command("store-password")
def store_password(
    path: Path = typer.Argument(help="Password file to create"),
) -> None:
    """Ask for a password and store it encrypted, for use as --password file:PATH."""
    if path.exists():
        console.print(f"[yellow]{path} already exists.[/yellow]")
        console.print("Delete it first to store a new password.")
        raise typer.Exit(1)

    build_password_resolver(confirmation=True).resolve(f"{PASSWORD_FILE_PREFIX}{path}")
    console.print(f"[green]Password stored in {path}[/green]")
    console.print(f"Use [bold]--password {PASSWORD_FILE_PREFIX}{path}[/bold]")
