"""VM/CT listing command for the pveshell CLI."""

from __future__ import annotations

from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from pveshell.cli.commands import get_authenticated_client
from pveshell.cli.hooks import run_hook
from pveshell.cli.options import (
    TableOutput,
    api_token_option,
    debug_option,
    dry_run_option,
    host_option,
    login_credentials,
    merge_global_options,
    output_option,
    password_option,
    script_file_option,
    timeout_option,
    username_option,
    verbose_option,
    vmids_option,
)
from pveshell.cli.output import render_table
from pveshell.cli.vmids import select_vms
from pveshell.exceptions import APIError
from pveshell.models import VmResource

app = typer.Typer(help="List VMs and containers")
console = Console()

DEFAULT_COLUMNS = ["vmid", "name", "node", "type", "status", "diskread", "diskwrite"]
VERBOSE_COLUMNS = DEFAULT_COLUMNS + ["pool", "cpu", "mem", "maxmem", "uptime"]

HOOK_PHASE = "list"


@app.callback(invoke_without_command=True)
def vms(
    ctx: typer.Context,
    vmid: str = vmids_option(),
    output: TableOutput = output_option(),
    verbose: bool = verbose_option(),
    script: Path = script_file_option(),
    host: str = host_option(),
    api_token: str = api_token_option(),
    username: str = username_option(),
    password: str = password_option(),
    timeout: int = timeout_option(),
    debug: bool = debug_option(),
    dry_run: bool = dry_run_option(),
) -> None:
    """List the VMs/CTs matched by --vmid with their disk IO."""
    if ctx.invoked_subcommand is not None:
        return

    options = merge_global_options(ctx, debug, dry_run)
    credentials = login_credentials(ctx, host, api_token, username, password)
    client = get_authenticated_client(credentials, timeout=timeout)

    try:
        resources = [VmResource.from_api(item) for item in client.get_resources("vm")]
    except APIError as e:
        console.print(f"[red]Unable to read cluster resources: {e.message}[/red]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Unable to read cluster resources: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        client.close()

    selected = select_vms(resources, vmid)
    if not selected:
        console.print("[yellow]No VM/CT matched.[/yellow]")
        raise typer.Exit(1)

    columns = VERBOSE_COLUMNS if verbose else DEFAULT_COLUMNS
    typer.echo(render_table(columns, selected, output), nl=False)

    if script is not None:
        failed = 0
        for vm in selected:
            code = run_hook(script, vm, HOOK_PHASE, dry_run=options.dry_run_is_active())
            if code:
                failed += 1
        if failed:
            console.print(f"[yellow]Hook failed for {failed} VM/CT.[/yellow]")
            raise typer.Exit(1)
