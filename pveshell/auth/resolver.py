"""Resolve command-line credentials into an authenticated Proxmox VE client.

API tokens take priority: when a token is given it is validated with a
version call and the username/password pair is never tried. Every failure,
including transport errors, is reported as a single AuthError.
"""

from __future__ import annotations

import logging
from typing import Callable

import typer

from ..client import PveClient, get_client_from_ha
from ..config import DEFAULT_TIMEOUT_SECONDS
from ..exceptions import AuthError
from .constants import ERROR_PROBLEM_CONNECTION
from .password import PasswordResolver
from .types import AuthResult, Credentials

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., PveClient]


class AuthResolver:
    """Exchange credentials for an authenticated PveClient."""

    def __init__(
        self,
        password_resolver: PasswordResolver,
        client_factory: ClientFactory = get_client_from_ha,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._password_resolver = password_resolver
        self._client_factory = client_factory
        self._timeout = timeout

    def resolve(self, credentials: Credentials) -> AuthResult:
        """Try the API token, else username/password, against the host list.

        Returns an AuthResult. Only an aborted password prompt (typer.Abort)
        propagates, so the CLI reports it as an abort and not as a connection
        problem.
        """
        error = ERROR_PROBLEM_CONNECTION
        client: PveClient | None = None
        try:
            client = self._client_factory(credentials.host, timeout=self._timeout)

            if credentials.api_token:
                client.set_api_token(credentials.api_token)
                if client.version().is_success_status_code:
                    return AuthResult.ok(client)
            else:
                password = self._password_resolver.resolve(credentials.password)
                if client.login(credentials.username or "", password or ""):
                    return AuthResult.ok(client)

            last_result = client.last_result
            if last_result is not None and not last_result.is_success_status_code:
                error += " " + last_result.reason_phrase
        except typer.Abort:
            if client is not None:
                client.close()
            raise
        except Exception as e:
            logger.debug("Login to %s failed", credentials.host, exc_info=True)
            if client is not None:
                client.close()
            auth_error = AuthError(error)
            auth_error.__cause__ = e
            return AuthResult.err(auth_error)

        client.close()
        return AuthResult.err(AuthError(error.rstrip()))


def client_try_login(
    credentials: Credentials,
    password_resolver: PasswordResolver,
    client_factory: ClientFactory = get_client_from_ha,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> PveClient:
    """Resolve credentials and return the client.

    Raises:
        AuthError: If no authentication mode succeeded.
    """
    resolver = AuthResolver(password_resolver, client_factory, timeout=timeout)
    return resolver.resolve(credentials).unwrap()
