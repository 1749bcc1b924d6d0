"""Test configuration for pveshell tests."""

from __future__ import annotations

import pytest

from pveshell._http import HttpResult
from pveshell.auth import PasswordResolver

TEST_KEY = "test-password-key"


class FakePrompt:
    """PasswordPrompt answering a fixed password and counting the questions."""

    def __init__(self, answer: str = "secret123") -> None:
        self.answer = answer
        self.calls = 0

    def ask(self, message: str) -> str:
        self.calls += 1
        return self.answer


class FailingPrompt:
    def ask(self, message: str) -> str:
        raise AssertionError("prompt must not be used")


class FakeClient:
    """Stand-in for PveClient recording the calls AuthResolver makes."""

    def __init__(
        self,
        version_status: int = 200,
        version_reason: str = "OK",
        login_ok: bool = True,
        version_error: Exception | None = None,
    ) -> None:
        self.version_status = version_status
        self.version_reason = version_reason
        self.login_ok = login_ok
        self.version_error = version_error
        self.api_token: str | None = None
        self.login_calls: list[tuple[str, str]] = []
        self.version_calls = 0
        self.last_result: HttpResult | None = None
        self.closed = False

    def set_api_token(self, token: str) -> None:
        self.api_token = token

    def version(self) -> HttpResult:
        self.version_calls += 1
        if self.version_error is not None:
            raise self.version_error
        self.last_result = HttpResult(self.version_status, self.version_reason)
        return self.last_result

    def login(self, username: str, password: str) -> bool:
        self.login_calls.append((username, password))
        if self.login_ok:
            self.last_result = HttpResult(200, "OK")
        else:
            self.last_result = HttpResult(401, "authentication failure")
        return self.login_ok

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def prompt():
    return FakePrompt()


@pytest.fixture
def password_resolver(prompt):
    return PasswordResolver(TEST_KEY, prompt)
