"""Shared HTTP request utilities for the Proxmox VE client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from .exceptions import APIError

_WRITE_METHODS = frozenset({"POST", "PUT", "DELETE"})


@dataclass
class HttpResult:
    """Outcome of the last API call, kept on the client for diagnostics."""

    status_code: int
    reason_phrase: str = ""
    data: Any = None

    @property
    def is_success_status_code(self) -> bool:
        return 200 <= self.status_code < 300


def build_headers(
    method: str,
    api_token: str | None = None,
    csrf_token: str | None = None,
) -> dict[str, str]:
    """Build request headers for either API token or ticket authentication."""
    headers = {"Accept": "application/json"}

    if api_token:
        headers["Authorization"] = f"PVEAPIToken={api_token}"
    elif csrf_token and method.upper() in _WRITE_METHODS:
        headers["CSRFPreventionToken"] = csrf_token

    return headers


def to_result(response: httpx.Response) -> HttpResult:
    """Convert an httpx response into an HttpResult without raising."""
    payload: dict[str, Any] = {}
    if response.content:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            payload = body

    return HttpResult(
        status_code=response.status_code,
        reason_phrase=response.reason_phrase or "",
        data=payload.get("data"),
    )


def raise_for_result(result: HttpResult) -> Any:
    """Return the result data, raising APIError for a non-successful status."""
    if not result.is_success_status_code:
        raise APIError(
            message=result.reason_phrase or "Proxmox VE API call failed",
            status_code=result.status_code,
            response=result,
        )
    return result.data


def build_query_params(**kwargs: Any) -> dict[str, Any]:
    """Build query parameters, filtering out None values."""
    return {k: v for k, v in kwargs.items() if v is not None}
