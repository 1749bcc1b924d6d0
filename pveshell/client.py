"""Synchronous HTTP client for the Proxmox VE API."""

from __future__ import annotations

import logging
import socket
from typing import Any

import httpx

from ._http import HttpResult, build_headers, build_query_params, raise_for_result, to_result
from .config import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT_SECONDS,
    HA_CONNECT_TIMEOUT_SECONDS,
    build_base_url,
    parse_hosts,
    verify_ssl,
)
from .exceptions import HostUnreachableError

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "PVEAuthCookie"
DEFAULT_REALM = "pam"


def _mask_token(token: str) -> str:
    """Keep the token id visible, hide the secret after '='."""
    token_id, sep, _ = token.partition("=")
    return f"{token_id}{sep}***" if sep else "***"


class PveClient:
    """Synchronous client for a single Proxmox VE host.

    Example:
        >>> from pveshell import PveClient
        >>> with PveClient("pve1") as client:
        ...     client.set_api_token("root@pam!cli=0000-1111")
        ...     print(client.version().data)

    Every call stores its outcome in ``last_result`` so callers can report
    the reason phrase of the last failure.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        verify: bool | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            host: Host name or address of a cluster node.
            port: API port (default: 8006).
            timeout: Request timeout in seconds (default: 30).
            verify: Verify TLS certificates. Defaults to the PVE_VERIFY_SSL
                environment variable, off when unset.
        """
        self.host = host
        self.port = port
        self._base_url = build_base_url(host, port)
        self._api_token: str | None = None
        self._csrf_token: str | None = None
        self.last_result: HttpResult | None = None
        self._client = httpx.Client(
            timeout=timeout,
            verify=verify_ssl() if verify is None else verify,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def api_token(self) -> str | None:
        return self._api_token

    def set_api_token(self, token: str) -> None:
        """Authenticate further calls with an API token ``USER@REALM!TOKENID=UUID``."""
        self._api_token = token
        logger.debug("Using API token %s for %s", _mask_token(token), self.host)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> HttpResult:
        """Issue a request against ``/api2/json`` and record it as ``last_result``.

        Transport failures (``httpx.HTTPError``) propagate to the caller.
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.debug("%s %s", method, url)

        response = self._client.request(
            method,
            url,
            params=build_query_params(**(params or {})) or None,
            data=data,
            headers=build_headers(method, self._api_token, self._csrf_token),
        )
        self.last_result = to_result(response)
        logger.debug(
            "%s %s -> %s %s",
            method,
            url,
            self.last_result.status_code,
            self.last_result.reason_phrase,
        )
        return self.last_result

    def get(self, path: str, **params: Any) -> HttpResult:
        return self.request("GET", path, params=params)

    def post(self, path: str, **data: Any) -> HttpResult:
        return self.request("POST", path, data=data)

    def put(self, path: str, **data: Any) -> HttpResult:
        return self.request("PUT", path, data=data)

    def delete(self, path: str, **params: Any) -> HttpResult:
        return self.request("DELETE", path, params=params)

    def login(self, username: str, password: str) -> bool:
        """Create an authentication ticket with username and password.

        A username without ``@realm`` is treated as a ``pam`` user.

        Returns:
            True when the ticket was issued.
        """
        if "@" not in username:
            username = f"{username}@{DEFAULT_REALM}"

        result = self.post("/access/ticket", username=username, password=password)
        if not result.is_success_status_code or not isinstance(result.data, dict):
            return False

        ticket = result.data.get("ticket")
        if not ticket:
            return False

        self._client.cookies.set(AUTH_COOKIE_NAME, ticket)
        self._csrf_token = result.data.get("CSRFPreventionToken")
        logger.debug("Logged in to %s as %s", self.host, username)
        return True

    def version(self) -> HttpResult:
        """Return the API version (a cheap call used to validate credentials)."""
        return self.get("/version")

    def get_resources(self, resource_type: str | None = None) -> list[dict[str, Any]]:
        """List cluster resources, optionally filtered by type (``vm``, ``node``, ...)."""
        result = self.get("/cluster/resources", type=resource_type)
        return raise_for_result(result) or []

    def close(self) -> None:
        """Release the underlying HTTP client resources."""
        self._client.close()

    def __enter__(self) -> PveClient:
        return self

    def __exit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        self.close()


def _is_reachable(host: str, port: int, timeout: float) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug("Host %s:%s not reachable: %s", host, port, e)
        return False


def get_client_from_ha(
    host_list: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    connect_timeout: float = HA_CONNECT_TIMEOUT_SECONDS,
) -> PveClient:
    """Return a client for the first reachable host of ``host[:port],host1[:port]``.

    A single host is used as is, without a connection check.

    Raises:
        HostUnreachableError: If the list is empty or no host accepts a connection.
    """
    hosts = parse_hosts(host_list)
    if not hosts:
        raise HostUnreachableError("No host specified")

    if len(hosts) == 1:
        host, port = hosts[0]
        return PveClient(host, port, timeout=timeout)

    for host, port in hosts:
        if _is_reachable(host, port, connect_timeout):
            logger.debug("Selected host %s:%s", host, port)
            return PveClient(host, port, timeout=timeout)

    raise HostUnreachableError(f"No reachable host in '{host_list}'")
