"""
Unit Tests for the Netflex API Client.

Uses unittest.mock to stand in for the requests session, so no real
HTTP requests are made.
"""
import os
from unittest.mock import MagicMock, patch

import pytest
import requests

from netflex import NetflexAPIClient, get_client, set_client


def make_response(status_code=200, json_data=None, content=b""):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = json_data
    response.content = content
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return NetflexAPIClient("pub", "priv", api_url="https://api.example.test/v1/", session=session)


class TestNetflexAPIClientInitialization:
    """Test client construction."""

    def test_init_sets_basic_auth(self, client, session):
        assert client.api_url == "https://api.example.test/v1"
        assert session.auth == ("pub", "priv")

    def test_init_without_credentials(self, session):
        client = NetflexAPIClient(None, None, session=session)
        assert client.api_url == NetflexAPIClient.DEFAULT_API_URL

    def test_from_config_inline_keys(self):
        client = NetflexAPIClient.from_config({
            "netflex": {
                "url": "https://api.example.test/v2",
                "public_key": "pub",
                "private_key": "priv",
                "timeout": 5
            }
        })

        assert client.api_url == "https://api.example.test/v2"
        assert client.public_key == "pub"
        assert client.session.auth == ("pub", "priv")
        assert client.timeout == 5

    def test_from_config_secret_files(self, tmp_path):
        public_file = tmp_path / "public"
        private_file = tmp_path / "private"
        public_file.write_text("file-pub\n")
        private_file.write_text("file-priv\n")

        client = NetflexAPIClient.from_config({
            "netflex": {
                "public_key_file": str(public_file),
                "private_key_file": str(private_file)
            }
        })

        assert client.session.auth == ("file-pub", "file-priv")

    def test_from_config_environment_fallback(self):
        with patch.dict(os.environ, {"NETFLEX_PUBLIC_KEY": "env-pub", "NETFLEX_PRIVATE_KEY": "env-priv"}):
            client = NetflexAPIClient.from_config({"netflex": {"public_key_file": "/nonexistent/key"}})

        assert client.session.auth == ("env-pub", "env-priv")
        assert client.api_url == NetflexAPIClient.DEFAULT_API_URL


class TestNetflexAPIClientRequests:
    """Test GET/POST handling."""

    def test_get_returns_json(self, client, session):
        session.request.return_value = make_response(json_data=[{"alias": "a"}])

        result = client.get("foundation/variables")

        assert result == [{"alias": "a"}]
        session.request.assert_called_once_with(
            "GET", "https://api.example.test/v1/foundation/variables",
            timeout=30, params=None
        )

    def test_post_sends_json_body(self, client, session):
        session.request.return_value = make_response(json_data={"ok": True})

        assert client.post("/some/path", json={"a": 1}) == {"ok": True}
        session.request.assert_called_once_with(
            "POST", "https://api.example.test/v1/some/path",
            timeout=30, json={"a": 1}
        )

    def test_post_raw_returns_bytes(self, client, session):
        session.request.return_value = make_response(content=b"PK\x03\x04")

        assert client.post_raw("foundation/wallet/pkpass", json={}) == b"PK\x03\x04"

    def test_http_error_is_raised(self, client, session):
        session.request.return_value = make_response(status_code=500)

        with pytest.raises(requests.exceptions.HTTPError):
            client.get("foundation/variables")

    def test_timeout_is_raised(self, client, session):
        session.request.side_effect = requests.exceptions.Timeout("timed out")

        with pytest.raises(requests.exceptions.Timeout):
            client.get("foundation/variables")

    def test_connection_error_is_raised(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(requests.exceptions.RequestException):
            client.post_raw("foundation/wallet/pkpass", json={})


class TestDefaultClient:
    """Test the process-wide client accessors."""

    def test_get_client_builds_from_config(self):
        with patch("config.load_config", return_value={"netflex": {"public_key": "p", "private_key": "s"}}):
            client = get_client()

        assert isinstance(client, NetflexAPIClient)
        assert get_client() is client

    def test_set_client_replaces_default(self):
        custom = MagicMock(spec=NetflexAPIClient)
        set_client(custom)
        assert get_client() is custom
