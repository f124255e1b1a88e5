"""HTTP client for the wasp platform API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .config import USER_AGENT
from .credentials import CredentialStore
from .errors import TransportError
from .types import ClientContext

logger = logging.getLogger(__name__)


class PlatformClient:
    """HTTP client bound to one API endpoint and account.

    The login token is read from the credential store on every request, so a
    token that expired or was removed since the last call is caught before
    anything goes over the wire.
    """

    def __init__(
        self, context: ClientContext | None = None, store: CredentialStore | None = None
    ) -> None:
        """Initialize the Platform API client.

        Args:
            context: API base URL and account label.
            store: Credential store. Defaults to one keyed by the context.
        """
        self.context = context or ClientContext()
        self.store = store or CredentialStore(self.context.api_url, self.context.account)

    def url(self, path: str) -> str:
        """Join the base URL and ``path``; the caller supplies the leading slash."""
        return f"{self.context.api_url}{path}"

    def _session(self, access_token: str | None = None) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": USER_AGENT,
                "Accept-Encoding": "gzip",
            }
        )
        if access_token is not None:
            session.headers["Authorization"] = f"Bearer {access_token}"
        return session

    def _send(
        self, session: requests.Session, method: str, path: str, **kwargs: Any
    ) -> requests.Response:
        url = self.url(path)
        logger.debug("%s %s", method, url)
        # Uploads and compiles can run for a long time
        kwargs.setdefault("timeout", None)
        try:
            with session:
                response = session.request(method, url, **kwargs)
        except requests.exceptions.SSLError as e:
            raise TransportError(f"TLS error talking to {self.context.api_url}: {e}", e) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Cannot connect to {self.context.api_url}: {e}", e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Network request failed: {e}", e) from e
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """Send an authenticated request.

        Args:
            method: HTTP method.
            path: API path starting with ``/``.
            **kwargs: Passed through to :meth:`requests.Session.request`
                (``data``, ``json``, ``params``...).

        Returns:
            The raw response, whatever its status.

        Raises:
            CredentialError: If no valid login token is stored.
            TransportError: If no response was received.
        """
        access_token = self.store.get()
        return self._send(self._session(access_token), method, path, **kwargs)

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("POST", path, **kwargs)

    def login(self, username: str, password: str) -> requests.Response:
        """POST /login with HTTP Basic credentials; no stored token is needed."""
        return self._send(
            self._session(), "POST", "/login", auth=(username, password)
        )
