"""Shared fixtures for wasp CLI tests."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import patch

import pytest
import requests

from wasp.cli.platform.client import PlatformClient
from wasp.cli.platform.credentials import CredentialStore
from wasp.cli.platform.deploy import DeployWorkflow
from wasp.cli.platform.types import ClientContext

API_URL = "https://api.example-platform.test"


class MemoryBackend:
    """In-memory SecretBackend."""

    def __init__(self) -> None:
        self.secrets: dict[tuple[str, str], str] = {}

    def set_secret(self, service: str, account: str, secret: str) -> None:
        self.secrets[(service, account)] = secret

    def get_secret(self, service: str, account: str) -> str | None:
        return self.secrets.get((service, account))

    def delete_secret(self, service: str, account: str) -> None:
        del self.secrets[(service, account)]


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def make_response(
    status_code: int = 200,
    json_body: Any = None,
    text: str | None = None,
    url: str = API_URL,
) -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode()
    else:
        response._content = (text or "").encode()
    return response


class FakeAPI:
    """Stand-in for requests.Session.request routing on (method, path).

    Install with ``patch.object(requests.Session, "request", autospec=True,
    side_effect=api)`` so the session is passed in and its headers can be
    recorded.
    """

    def __init__(self, base_url: str = API_URL) -> None:
        self.base_url = base_url
        self.routes: dict[tuple[str, str], requests.Response] = {}
        self.calls: list[dict[str, Any]] = []

    def add(self, method: str, path: str, status_code: int = 200, **body: Any) -> None:
        self.routes[(method, path)] = make_response(
            status_code, url=self.base_url + path, **body
        )

    def __call__(self, session: requests.Session, method: str, url: str, **kwargs: Any):
        assert url.startswith(self.base_url), url
        path = url[len(self.base_url) :]
        data = kwargs.get("data")
        if hasattr(data, "read"):
            data = data.read()
        self.calls.append(
            {
                "method": method,
                "path": path,
                "headers": dict(session.headers),
                "json": kwargs.get("json"),
                "data": data,
                "auth": kwargs.get("auth"),
                "timeout": kwargs.get("timeout", "unset"),
            }
        )
        try:
            return self.routes[(method, path)]
        except KeyError:
            return make_response(404, json_body={"error": f"no route {method} {path}"})

    def paths(self) -> list[tuple[str, str]]:
        return [(c["method"], c["path"]) for c in self.calls]


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(backend, clock):
    return CredentialStore(API_URL, "default", backend=backend, clock=clock)


@pytest.fixture
def logged_in(store):
    """Store a valid token for the default account."""
    store.set("tok-123", 3600)
    return store


@pytest.fixture
def client(store):
    return PlatformClient(ClientContext(api_url=API_URL), store=store)


@pytest.fixture
def workflow(client):
    return DeployWorkflow(client)


@pytest.fixture
def api():
    fake = FakeAPI()
    with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
        yield fake
