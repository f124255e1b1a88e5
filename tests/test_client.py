"""Tests for wasp.cli.platform.client."""

from unittest.mock import patch

import pytest
import requests

from wasp.cli.platform.client import PlatformClient
from wasp.cli.platform.errors import CredentialExpired, CredentialNotFound, TransportError
from wasp.cli.platform.types import ClientContext

from .conftest import API_URL


class TestPlatformClient:
    """Tests for PlatformClient."""

    def test_url_is_verbatim_concatenation(self, client):
        assert client.url("/hosts/example.com") == f"{API_URL}/hosts/example.com"

    def test_url_keeps_base_path(self, store):
        client = PlatformClient(ClientContext(api_url="http://localhost:8080/api"), store=store)
        assert client.url("/compile") == "http://localhost:8080/api/compile"

    def test_default_store_keyed_by_context(self):
        with patch("wasp.cli.platform.credentials.get_backend"):
            client = PlatformClient(ClientContext(api_url=API_URL, account="work"))
        assert client.store.service == API_URL
        assert client.store.account == "work"

    def test_request_headers(self, client, logged_in, api):
        api.add("GET", "/hosts/a", json_body={})
        client.get("/hosts/a")

        headers = api.calls[0]["headers"]
        assert headers["Authorization"] == "Bearer tok-123"
        assert headers["Accept-Encoding"] == "gzip"
        assert headers["User-Agent"].startswith("wasp-cli/")

    def test_no_timeout(self, client, logged_in, api):
        api.add("POST", "/compile", json_body={"ok": "m_1"})
        client.post("/compile", data=b"\0asm")
        assert api.calls[0]["timeout"] is None

    def test_kwargs_pass_through(self, client, logged_in, api):
        api.add("POST", "/hosts", json_body={})
        client.post("/hosts", json={"host": "a"})
        assert api.calls[0]["json"] == {"host": "a"}

    def test_returns_non_success_response(self, client, logged_in, api):
        api.add("GET", "/hosts/a", 500, text="oops")
        response = client.get("/hosts/a")
        assert response.status_code == 500

    def test_no_request_without_token(self, client, api):
        with pytest.raises(CredentialNotFound):
            client.get("/hosts/a")
        assert api.calls == []

    def test_no_request_with_expired_token(self, client, logged_in, clock, api):
        clock.advance(3600)
        with pytest.raises(CredentialExpired):
            client.post("/hosts", json={})
        assert api.calls == []

    def test_token_read_on_every_call(self, client, store, api):
        api.add("GET", "/hosts/a", json_body={})
        store.set("first", 3600)
        client.get("/hosts/a")
        store.set("second", 3600)
        client.get("/hosts/a")

        assert [c["headers"]["Authorization"] for c in api.calls] == [
            "Bearer first",
            "Bearer second",
        ]

    def test_login_is_unauthenticated(self, client, api):
        api.add("POST", "/login", json_body={"access_token": "t", "expires_in": 1})
        client.login("alice", "hunter2")

        call = api.calls[0]
        assert call["auth"] == ("alice", "hunter2")
        assert "Authorization" not in call["headers"]

    @pytest.mark.parametrize(
        "exc",
        [
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.SSLError("bad cert"),
            requests.exceptions.InvalidURL("bad url"),
        ],
    )
    def test_transport_errors(self, client, logged_in, exc):
        with patch.object(requests.Session, "request", side_effect=exc):
            with pytest.raises(TransportError) as exc_info:
                client.get("/hosts/a")
        assert exc_info.value.cause is exc
