"""Display formats for values returned by the Proxmox VE API.

Format codes can be used directly with ``format_value`` or inside templates
through ``PveFormatter``::

    >>> PveFormatter().format("{0:fb}", 1536)
    '1.5 KB'
"""

from __future__ import annotations

import string
from datetime import datetime
from typing import Any

FORMAT_BYTES = "fb"
FORMAT_PERCENTAGE = "fp"
FORMAT_UNIX_TIME = "fut"
FORMAT_UPTIME = "fu"

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB")


def _trim(number: float) -> str:
    return f"{number:.2f}".rstrip("0").rstrip(".")


def format_bytes(value: Any) -> str:
    """Human readable size with a 1024 base (``1536 -> '1.5 KB'``)."""
    size = float(value or 0)
    sign = "-" if size < 0 else ""
    size = abs(size)

    unit = 0
    # compare the displayed value so 1023.999 KB shows as 1 MB
    while round(size, 2) >= 1024 and unit < len(_BYTE_UNITS) - 1:
        size /= 1024
        unit += 1

    return f"{sign}{_trim(size)} {_BYTE_UNITS[unit]}"


def format_percentage(value: Any) -> str:
    """Fraction as percentage (``0.256 -> '25.6%'``)."""
    return f"{_trim(float(value or 0) * 100)}%"


def format_unix_time(value: Any) -> str:
    """Epoch seconds as local ``YYYY-MM-DD HH:MM:SS``; zero means unknown."""
    if not value:
        return ""
    return datetime.fromtimestamp(int(value)).strftime("%Y-%m-%d %H:%M:%S")


def format_uptime(value: Any) -> str:
    """Seconds as ``<days>d HH:MM:SS``."""
    seconds = int(value or 0)
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return f"{days}d {hours:02}:{minutes:02}:{seconds:02}"


_FORMATTERS = {
    FORMAT_BYTES: format_bytes,
    FORMAT_PERCENTAGE: format_percentage,
    FORMAT_UNIX_TIME: format_unix_time,
    FORMAT_UPTIME: format_uptime,
}


def format_value(format_code: str | None, value: Any) -> str:
    """Format a value with one of the codes above, or a standard format spec."""
    if value is None:
        return ""
    formatter = _FORMATTERS.get(format_code or "")
    if formatter is not None:
        return formatter(value)
    return format(value, format_code or "")


class PveFormatter(string.Formatter):
    """``str.format`` compatible formatter that understands the Proxmox VE codes."""

    def format_field(self, value: Any, format_spec: str) -> str:
        if format_spec in _FORMATTERS:
            return format_value(format_spec, value)
        return super().format_field(value, format_spec)
