"""Configuration helpers for pveshell."""

from __future__ import annotations

import os

DEFAULT_PORT = 8006
DEFAULT_TIMEOUT_SECONDS = 30.0
HA_CONNECT_TIMEOUT_SECONDS = 2.0

ENV_HOST = "PVE_HOST"
ENV_API_TOKEN = "PVE_API_TOKEN"
ENV_USERNAME = "PVE_USERNAME"
ENV_PASSWORD = "PVE_PASSWORD"
ENV_VERIFY_SSL = "PVE_VERIFY_SSL"
ENV_PASSWORD_KEY = "PVESHELL_PASSWORD_KEY"
ENV_UPDATE_REPOSITORY = "PVESHELL_UPDATE_REPOSITORY"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def verify_ssl() -> bool:
    """Whether TLS certificates are verified (off unless PVE_VERIFY_SSL is truthy)."""

    return os.environ.get(ENV_VERIFY_SSL, "").strip().lower() in _TRUE_VALUES


def parse_hosts(host_list: str) -> list[tuple[str, int]]:
    """Split ``host[:port],host1[:port]`` into ``(host, port)`` pairs.

    IPv6 addresses must be bracketed when a port is given (``[fe80::1]:8006``).
    """
    hosts: list[tuple[str, int]] = []
    for entry in host_list.split(","):
        entry = entry.strip()
        if not entry:
            continue

        if entry.startswith("["):
            address, _, rest = entry[1:].partition("]")
            port = rest[1:] if rest.startswith(":") else ""
        elif entry.count(":") == 1:
            address, port = entry.split(":")
        else:
            address, port = entry, ""

        if not port:
            hosts.append((address, DEFAULT_PORT))
            continue
        if not port.isdigit():
            raise ValueError(f"Invalid port in host '{entry}'")
        hosts.append((address, int(port)))

    return hosts


def build_base_url(host: str, port: int = DEFAULT_PORT) -> str:
    """Build the API root URL for a host, never ending with a trailing slash."""

    if ":" in host:
        host = f"[{host}]"
    return f"https://{host}:{port}/api2/json"
