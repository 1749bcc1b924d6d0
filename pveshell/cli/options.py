"""Reusable typer options, validators and the per-invocation option context.

Commands declare the options they need with the factories below, e.g.::

    @app.command()
    def status(
        ctx: typer.Context,
        host: str = host_option(),
        api_token: str | None = api_token_option(),
        ...
    ) -> None:
        credentials = login_credentials(ctx, host, api_token, username, password)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

import typer

from pveshell.auth.types import Credentials
from pveshell.config import ENV_API_TOKEN, ENV_HOST, ENV_PASSWORD, ENV_USERNAME
from pveshell.exceptions import ConfigurationError

from .constants import (
    API_TOKEN_HELP,
    APP_NAME,
    DEFAULT_TIMEOUT_OPTION,
    HOST_HELP,
    MAX_TIMEOUT_OPTION,
    PASSWORD_HELP,
    USERNAME_HELP,
    VMIDS_HELP,
)
from .logging_config import configure_logging


class TableOutput(str, Enum):
    text = "text"
    markdown = "markdown"
    html = "html"
    json = "json"
    jsonpretty = "jsonpretty"


@dataclass
class CommandOptions:
    """Global options of one invocation, stored on the typer context."""

    debug: bool = False
    dry_run: bool = False
    credentials: Credentials | None = None

    def get_host(self) -> str | None:
        return self.credentials.host if self.credentials else None

    def get_api_token(self) -> str | None:
        return self.credentials.api_token if self.credentials else None

    def get_username(self) -> str | None:
        return self.credentials.username if self.credentials else None

    def get_password(self) -> str | None:
        return self.credentials.password if self.credentials else None

    def dry_run_is_active(self) -> bool:
        return self.dry_run

    def debug_is_active(self) -> bool:
        return self.debug

    def log_level_from_debug(self) -> int:
        return logging.DEBUG if self.debug else logging.WARNING


def get_command_options(ctx: typer.Context) -> CommandOptions:
    """Return the invocation's CommandOptions, creating it when the root callback did not run."""
    return ctx.ensure_object(CommandOptions)


def merge_global_options(ctx: typer.Context, debug: bool, dry_run: bool) -> CommandOptions:
    """Fold --debug/--dry-run given after a subcommand into the invocation options."""
    options = get_command_options(ctx)
    if debug and not options.debug:
        options.debug = True
        configure_logging(options.log_level_from_debug())
    options.dry_run = options.dry_run or dry_run
    return options


def make_description(name: str, description: str) -> str:
    """Append the suite footer to a command description."""
    return f"{description}\n\n{name} is a part of suite {APP_NAME}."


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def _option_name(param: typer.CallbackParam) -> str:
    return param.opts[0] if param.opts else str(param.name)


def validate_range(min_value: int, max_value: int) -> Callable[..., Any]:
    """Build a callback rejecting values outside ``[min_value, max_value]``."""

    def _validate(param: typer.CallbackParam, value: int | None) -> int | None:
        if value is not None and not min_value <= value <= max_value:
            raise typer.BadParameter(f"Option {_option_name(param)} with value '{value}' is not in range!")
        return value

    return _validate


def validate_exist_file(param: typer.CallbackParam, value: Path | None) -> Path | None:
    if value is not None and not value.is_file():
        raise typer.BadParameter(f"Option {_option_name(param)} with value '{value}' is not a valid file!")
    return value


def validate_exist_directory(param: typer.CallbackParam, value: Path | None) -> Path | None:
    if value is not None and not value.is_dir():
        raise typer.BadParameter(f"Option {_option_name(param)} with value '{value}' is not a valid directory!")
    return value


# ---------------------------------------------------------------------------
# Option factories
# ---------------------------------------------------------------------------


def host_option() -> Any:
    return typer.Option(..., "--host", envvar=ENV_HOST, help=HOST_HELP)


def api_token_option() -> Any:
    return typer.Option(None, "--api-token", envvar=ENV_API_TOKEN, help=API_TOKEN_HELP)


def username_option() -> Any:
    return typer.Option(None, "--username", envvar=ENV_USERNAME, help=USERNAME_HELP)


def password_option() -> Any:
    return typer.Option(None, "--password", envvar=ENV_PASSWORD, help=PASSWORD_HELP)


def verbose_option() -> Any:
    return typer.Option(False, "--verbose", "-v", help="Verbose.")


def debug_option() -> Any:
    return typer.Option(False, "--debug", help="Debug application", hidden=True)


def dry_run_option() -> Any:
    return typer.Option(False, "--dry-run", help="Dry run application", hidden=True)


def output_option() -> Any:
    return typer.Option(TableOutput.text, "--output", "-o", help="Type output", case_sensitive=False)


def vmids_option() -> Any:
    return typer.Option(None, "--vmid", help=VMIDS_HELP)


def timeout_option(default: int = DEFAULT_TIMEOUT_OPTION) -> Any:
    return typer.Option(
        default,
        "--timeout",
        help="Timeout operation in seconds",
        callback=validate_range(1, MAX_TIMEOUT_OPTION),
    )


def script_file_option() -> Any:
    return typer.Option(None, "--script", help="Use specified hook script", callback=validate_exist_file)


def login_credentials(
    ctx: typer.Context,
    host: str,
    api_token: str | None,
    username: str | None,
    password: str | None,
) -> Credentials:
    """Build the login Credentials and record them on the context.

    Invalid combinations are reported as usage errors (exit code 2).
    """
    credentials = Credentials(host=host, api_token=api_token, username=username, password=password)
    try:
        credentials.validate()
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), ctx=ctx, param_hint="'--host'") from e

    get_command_options(ctx).credentials = credentials
    return credentials
