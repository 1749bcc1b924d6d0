"""Self-update commands for the pveshell CLI."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import typer
from rich.console import Console

from pveshell.cli.constants import APP_NAME, APP_UPGRADE_FINISH
from pveshell.exceptions import UpdateError
from pveshell.update import get_update_info, upgrade, upgrade_finish

console = Console()


def current_executable() -> Path:
    """Path of the running program (the frozen binary or the console script)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve()
    return Path(sys.argv[0]).resolve()


def _current_version() -> str:
    from pveshell import __version__

    return __version__


def check_update() -> None:
    """Check update application."""
    try:
        info = get_update_info(APP_NAME, _current_version())
    except UpdateError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    typer.echo(info.info, nl=False)


def upgrade_app(
    quiet: bool = typer.Option(False, "--quiet", help="Non-interactive mode, does not request confirmation"),
) -> None:
    """Upgrade application."""
    try:
        info = get_update_info(APP_NAME, _current_version())
        typer.echo(info.info)

        if not info.is_new_version or not info.download_url:
            return

        if not quiet and not typer.confirm("Confirm upgrade application?", default=False):
            typer.echo("Upgrade abort!")
            return

        typer.echo(f"Download {info.download_url} ....")
        new_path = upgrade(info.download_url, current_executable())
    except UpdateError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    subprocess.Popen([str(new_path), APP_UPGRADE_FINISH])


def upgrade_finish_app() -> None:
    """Finish upgrade application."""
    try:
        upgrade_finish(current_executable())
    except (UpdateError, OSError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    typer.echo("Upgrade completed!")
