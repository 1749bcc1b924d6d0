"""Tests for the PveClient and the HA client factory."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from pveshell import PveClient, get_client_from_ha
from pveshell.exceptions import APIError, HostUnreachableError


def _mock_response(status_code=200, body=None, reason="OK"):
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.reason_phrase = reason
    response.content = json.dumps(body).encode() if body is not None else b""
    response.json.return_value = body
    return response


@pytest.fixture
def client():
    client = PveClient("pve1")
    yield client
    client.close()


class TestPveClientInit:
    def test_base_url(self, client):
        assert client.base_url == "https://pve1:8006/api2/json"
        assert client.last_result is None

    def test_custom_port_and_ipv6(self):
        with PveClient("fe80::1", 443) as client:
            assert client.base_url == "https://[fe80::1]:443/api2/json"


class TestApiToken:
    def test_token_header_sent(self, client):
        client.set_api_token("root@pam!cli=1111-2222")

        with patch.object(httpx.Client, "request", return_value=_mock_response(body={"data": {}})) as mock_request:
            client.version()

        headers = mock_request.call_args[1]["headers"]
        assert headers["Authorization"] == "PVEAPIToken=root@pam!cli=1111-2222"

    def test_version_records_last_result(self, client):
        body = {"data": {"version": "8.1.4", "release": "8.1"}}
        with patch.object(httpx.Client, "request", return_value=_mock_response(body=body)) as mock_request:
            result = client.version()

        assert result.is_success_status_code
        assert result.data["version"] == "8.1.4"
        assert client.last_result is result
        assert mock_request.call_args[0] == ("GET", "https://pve1:8006/api2/json/version")

    def test_failure_keeps_reason_phrase(self, client):
        with patch.object(httpx.Client, "request", return_value=_mock_response(401, reason="invalid token")):
            result = client.version()

        assert not result.is_success_status_code
        assert client.last_result.reason_phrase == "invalid token"


class TestLogin:
    def test_login_success_stores_ticket(self, client):
        body = {"data": {"ticket": "PVE:ticket", "CSRFPreventionToken": "csrf-123"}}
        with patch.object(httpx.Client, "request", return_value=_mock_response(body=body)) as mock_request:
            assert client.login("admin@pve", "s3cret") is True

        method, url = mock_request.call_args[0]
        assert method == "POST"
        assert url.endswith("/access/ticket")
        assert mock_request.call_args[1]["data"] == {"username": "admin@pve", "password": "s3cret"}
        assert client._client.cookies.get("PVEAuthCookie") == "PVE:ticket"

    def test_write_requests_carry_csrf_token(self, client):
        login_body = {"data": {"ticket": "PVE:ticket", "CSRFPreventionToken": "csrf-123"}}
        with patch.object(httpx.Client, "request", return_value=_mock_response(body=login_body)):
            client.login("admin@pve", "s3cret")

        with patch.object(httpx.Client, "request", return_value=_mock_response(body={"data": None})) as mock_request:
            client.post("/nodes/pve1/qemu/100/status/start")
            assert mock_request.call_args[1]["headers"]["CSRFPreventionToken"] == "csrf-123"
            client.get("/nodes")
            assert "CSRFPreventionToken" not in mock_request.call_args[1]["headers"]

    def test_username_without_realm_uses_pam(self, client):
        body = {"data": {"ticket": "t", "CSRFPreventionToken": "c"}}
        with patch.object(httpx.Client, "request", return_value=_mock_response(body=body)) as mock_request:
            client.login("root", "s3cret")

        assert mock_request.call_args[1]["data"]["username"] == "root@pam"

    def test_login_failure(self, client):
        with patch.object(httpx.Client, "request", return_value=_mock_response(401, reason="authentication failure")):
            assert client.login("admin@pve", "wrong") is False

        assert client.last_result.reason_phrase == "authentication failure"
        assert client._client.cookies.get("PVEAuthCookie") is None

    def test_transport_error_propagates(self, client):
        with patch.object(httpx.Client, "request", side_effect=httpx.ConnectError("refused")):
            with pytest.raises(httpx.ConnectError):
                client.login("admin@pve", "s3cret")


class TestResources:
    def test_get_resources(self, client):
        body = {"data": [{"vmid": 100, "name": "web"}]}
        with patch.object(httpx.Client, "request", return_value=_mock_response(body=body)) as mock_request:
            resources = client.get_resources("vm")

        assert resources == [{"vmid": 100, "name": "web"}]
        assert mock_request.call_args[1]["params"] == {"type": "vm"}

    def test_get_resources_error(self, client):
        with patch.object(httpx.Client, "request", return_value=_mock_response(500, reason="Internal Server Error")):
            with pytest.raises(APIError) as exc_info:
                client.get_resources("vm")

        assert exc_info.value.status_code == 500


class TestClientFromHA:
    def test_single_host_is_used_without_connecting(self):
        with patch("pveshell.client.socket.create_connection") as mock_connect:
            client = get_client_from_ha("pve1:8007")

        mock_connect.assert_not_called()
        assert (client.host, client.port) == ("pve1", 8007)
        client.close()

    def test_first_reachable_host_selected(self):
        with patch("pveshell.client._is_reachable", side_effect=[False, True]) as mock_reachable:
            client = get_client_from_ha("pve1,pve2:8007,pve3")

        assert (client.host, client.port) == ("pve2", 8007)
        assert mock_reachable.call_count == 2
        client.close()

    def test_no_reachable_host(self):
        with patch("pveshell.client._is_reachable", return_value=False):
            with pytest.raises(HostUnreachableError):
                get_client_from_ha("pve1,pve2")

    def test_reachability_uses_socket(self):
        with patch("pveshell.client.socket.create_connection", side_effect=[OSError("refused"), MagicMock()]):
            client = get_client_from_ha("pve1,pve2")

        assert client.host == "pve2"
        client.close()

    def test_empty_host_list(self):
        with pytest.raises(HostUnreachableError):
            get_client_from_ha(" , ")
