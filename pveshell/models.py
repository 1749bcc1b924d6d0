"""Data models for Proxmox VE API payloads.

Fields carry their JSON name and display format in dataclass metadata, so
tables can be rendered without per-model code.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from .formatting import FORMAT_BYTES, FORMAT_PERCENTAGE, FORMAT_UPTIME, format_value


def _field(json_name: str, default: Any = None, display_format: str | None = None) -> Any:
    return field(default=default, metadata={"json": json_name, "format": display_format})


@dataclass
class DiskIO:
    """Disk read/write counters."""

    disk_read: int = _field("diskread", 0, FORMAT_BYTES)
    disk_write: int = _field("diskwrite", 0, FORMAT_BYTES)


@dataclass
class VmResource(DiskIO):
    """A VM or container row of ``/cluster/resources``."""

    vm_id: int = _field("vmid", 0)
    name: str = _field("name", "")
    node: str = _field("node", "")
    type: str = _field("type", "")
    status: str = _field("status", "")
    pool: str = _field("pool", "")
    cpu: float = _field("cpu", 0.0, FORMAT_PERCENTAGE)
    mem: int = _field("mem", 0, FORMAT_BYTES)
    max_mem: int = _field("maxmem", 0, FORMAT_BYTES)
    uptime: int = _field("uptime", 0, FORMAT_UPTIME)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> VmResource:
        values = {}
        for f in fields(cls):
            json_name = f.metadata["json"]
            if data.get(json_name) is not None:
                values[f.name] = data[json_name]
        values["vm_id"] = int(values.get("vm_id", 0))
        return cls(**values)


def column_names(model: type, include: list[str] | None = None) -> list[str]:
    """JSON names of a model's fields, optionally restricted to ``include``."""
    names = [f.metadata["json"] for f in fields(model)]
    if include is None:
        return names
    return [name for name in include if name in names]


def display_row(item: Any, columns: list[str]) -> list[str]:
    """Render the requested columns of a model instance as display strings."""
    by_json = {f.metadata["json"]: f for f in fields(item)}
    row = []
    for column in columns:
        f = by_json[column]
        row.append(format_value(f.metadata["format"], getattr(item, f.name)))
    return row


def raw_row(item: Any, columns: list[str]) -> dict[str, Any]:
    """Requested columns of a model instance keyed by JSON name, unformatted."""
    by_json = {f.metadata["json"]: f for f in fields(item)}
    return {column: getattr(item, by_json[column].name) for column in columns}
