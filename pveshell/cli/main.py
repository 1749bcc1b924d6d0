"""Main entry point for the pveshell CLI."""

from __future__ import annotations

import typer

from .commands import update as update_commands
from .commands import auth, vms
from .constants import APP_DESCRIPTION, APP_NAME, APP_UPGRADE_FINISH
from .logging_config import configure_logging
from .options import CommandOptions, debug_option, dry_run_option, make_description

app = typer.Typer(
    name=APP_NAME,
    help=make_description(APP_NAME, APP_DESCRIPTION),
    no_args_is_help=True,
)

app.add_typer(auth.app, name="auth")
app.add_typer(vms.app, name="vms")

app.command("app-check-update")(update_commands.check_update)
app.command("app-upgrade")(update_commands.upgrade_app)
app.command(APP_UPGRADE_FINISH, hidden=True)(update_commands.upgrade_finish_app)


def _version_callback(value: bool) -> None:
    """Handle --version and exit early."""
    if value:
        from pveshell import __version__

        typer.echo(f"{APP_NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    debug: bool = debug_option(),
    dry_run: bool = dry_run_option(),
) -> None:
    """pveshell CLI root callback."""
    _ = version
    options = CommandOptions(debug=debug, dry_run=dry_run)
    ctx.obj = options
    configure_logging(options.log_level_from_debug())


@app.command()
def version() -> None:
    """Show the CLI version."""
    from pveshell import __version__

    typer.echo(f"{APP_NAME} {__version__}")


if __name__ == "__main__":
    app()
