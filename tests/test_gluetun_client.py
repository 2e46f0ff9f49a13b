"""
Tests for fetching the forwarded port from Gluetun.
"""

import base64

import pytest
import requests
from qbit_port_sync.gluetun_client import GluetunClient

from conftest import make_response


class TestAuthHeaders:
    def test_none(self):
        client = GluetunClient(auth_method="none")
        assert client.build_auth_headers() == {}

    def test_basic(self):
        client = GluetunClient(auth_method="basic", username="user", password="pass")
        expected = base64.b64encode(b"user:pass").decode()
        assert client.build_auth_headers() == {"Authorization": f"Basic {expected}"}

    def test_basic_without_password_sends_nothing(self, log_records):
        client = GluetunClient(auth_method="basic", username="user", password="")
        assert client.build_auth_headers() == {}
        assert any(level == "WARNING" for level, _ in log_records)

    def test_apikey(self):
        client = GluetunClient(auth_method="apikey", api_key="k3y")
        assert client.build_auth_headers() == {"X-API-Key": "k3y"}

    def test_apikey_without_key_sends_nothing(self):
        client = GluetunClient(auth_method="apikey", api_key="")
        assert client.build_auth_headers() == {}

    def test_method_is_case_insensitive(self):
        client = GluetunClient(auth_method="APIKey", api_key="k3y")
        assert client.build_auth_headers() == {"X-API-Key": "k3y"}

    def test_unknown_method_falls_back_to_none(self, log_records):
        client = GluetunClient(auth_method="bearer", api_key="k3y")
        assert client.build_auth_headers() == {}
        assert any("falling back to none" in message for _, message in log_records)


class TestGetForwardedPort:
    def test_returns_port(self, gluetun_client, http_session):
        http_session.get.return_value = make_response(json_data={"port": 55000})

        assert gluetun_client.get_forwarded_port() == 55000

        args, kwargs = http_session.get.call_args
        assert args[0] == "http://gluetun:8000/v1/portforward"
        assert kwargs["timeout"] == gluetun_client.timeout

    def test_sends_auth_header(self, http_session):
        client = GluetunClient(auth_method="apikey", api_key="k3y", session=http_session)
        http_session.get.return_value = make_response(json_data={"port": 55000})

        client.get_forwarded_port()

        assert http_session.get.call_args.kwargs["headers"] == {"X-API-Key": "k3y"}

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_failure(self, gluetun_client, http_session, log_records, status_code):
        http_session.get.return_value = make_response(status_code=status_code)

        assert gluetun_client.get_forwarded_port() is None
        assert any("authentication failed" in message for _, message in log_records)
        assert http_session.get.call_count == 1

    def test_server_error(self, gluetun_client, http_session):
        http_session.get.return_value = make_response(status_code=500)
        assert gluetun_client.get_forwarded_port() is None

    def test_network_failure(self, gluetun_client, http_session):
        http_session.get.side_effect = requests.exceptions.ConnectTimeout("timed out")
        assert gluetun_client.get_forwarded_port() is None

    def test_non_json_body(self, gluetun_client, http_session):
        http_session.get.return_value = make_response(text="<html>")
        assert gluetun_client.get_forwarded_port() is None

    @pytest.mark.parametrize("body", [
        {},
        {"port": 0},
        {"port": -1},
        {"port": 70000},
        {"port": "55000"},
        {"port": None},
        {"port": True},
        [55000],
    ])
    def test_no_usable_port(self, gluetun_client, http_session, body):
        http_session.get.return_value = make_response(json_data=body)
        assert gluetun_client.get_forwarded_port() is None
