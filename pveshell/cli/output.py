"""Render model rows in the output formats of ``--output``."""

from __future__ import annotations

import io
import json
from typing import Any, Sequence

from rich.console import Console
from rich.table import Table

from pveshell.models import display_row, raw_row

from .options import TableOutput


def _build_table(columns: list[str], rows: list[list[str]]) -> Table:
    table = Table()
    for column in columns:
        table.add_column(column, style="cyan" if column == "vmid" else None)
    for row in rows:
        table.add_row(*row)
    return table


def _export(table: Table, html: bool) -> str:
    console = Console(record=True, file=io.StringIO(), width=200, highlight=False)
    console.print(table)
    return console.export_html() if html else console.export_text()


def _markdown(columns: list[str], rows: list[list[str]]) -> str:
    lines = [
        "| " + " | ".join(columns) + " |",
        "| " + " | ".join("-" * max(len(column), 3) for column in columns) + " |",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines) + "\n"


def render_table(columns: list[str], items: Sequence[Any], output: TableOutput = TableOutput.text) -> str:
    """Render ``items`` (models from ``pveshell.models``) restricted to ``columns``.

    JSON outputs keep raw values; the table formats apply display formats.
    """
    if output in (TableOutput.json, TableOutput.jsonpretty):
        data = [raw_row(item, columns) for item in items]
        indent = 2 if output is TableOutput.jsonpretty else None
        return json.dumps(data, indent=indent) + "\n"

    rows = [display_row(item, columns) for item in items]
    if output is TableOutput.markdown:
        return _markdown(columns, rows)
    return _export(_build_table(columns, rows), html=output is TableOutput.html)
