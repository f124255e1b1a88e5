"""Upload, create, configure and view hosts on the platform.

Every remote call is checked with :func:`raise_for_response`. Module upload,
when needed, always finishes before the host request that uses its id.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime
from typing import Any

import requests
from pydantic import BaseModel, ValidationError

from .client import PlatformClient
from .errors import DecodeError, ModuleIOError, raise_for_response
from .types import (
    CompileResponse,
    HostConfiguration,
    HostCreatePayload,
    HostUpdatePayload,
    LoginResponse,
)

logger = logging.getLogger(__name__)


def parse_env(token: str) -> tuple[str, str | None]:
    """Parse a ``--env`` token.

    ``NAME=VALUE`` gives a string, ``NAME=`` gives None (unset on the host)
    and a bare ``NAME`` takes its value from the local environment.

    Raises:
        ValueError: If the name is empty or a bare name is not set locally.
    """
    name, sep, value = token.partition("=")
    if not name:
        raise ValueError(f"Invalid env '{token}'")
    if sep:
        return name, value or None
    if name not in os.environ:
        raise ValueError(f"{name} not found")
    return name, os.environ[name]


def _decode(response: requests.Response, model_cls: type[BaseModel]) -> Any:
    try:
        return model_cls.model_validate_json(response.content)
    except ValidationError as e:
        raise DecodeError(
            f"Unexpected response from server: {e.errors()[0]['msg']}"
        ) from e


class DeployWorkflow:
    """Host and module operations for one account.

    Args:
        client: Authenticated platform client.
        progress: Called with a short status line before each upload.
    """

    def __init__(
        self, client: PlatformClient, progress: Callable[[str], None] | None = None
    ) -> None:
        self.client = client
        self.progress = progress

    def upload(self, path: str) -> str:
        """Compile a local WASM module on the platform.

        Returns:
            Module id issued by the platform.

        Raises:
            ModuleIOError: If the file cannot be opened.
            PlatformAPIError: If the platform rejects the module.
            DecodeError: If the success body has no module id.
        """
        if self.progress:
            self.progress(f"Uploading module: {path!r}")
        try:
            f = open(path, "rb")
        except OSError as e:
            raise ModuleIOError(f"Cannot read module {path}: {e.strerror or e}") from e
        with f:
            response = self.client.post("/compile", data=f)
        raise_for_response(response)
        module_id = _decode(response, CompileResponse).module_id
        logger.debug("Uploaded %s as %s", path, module_id)
        return module_id

    def resolve_module(self, module: str | None) -> str | None:
        """Turn a module reference into a remote module id.

        A reference naming an existing local path is uploaded and replaced by
        the id the platform returns. Anything else is taken to be a module id
        already, so a local file shadows a remote id with the same name.
        """
        if module is None:
            return None
        if os.path.exists(module):
            return self.upload(module)
        return module

    def create_host(self, host: str, customer_id: str, config: HostConfiguration) -> None:
        payload = HostCreatePayload(
            host=host,
            customer_id=customer_id,
            module=self.resolve_module(config.module),
            function=config.function,
            env=config.env,
        )
        response = self.client.post("/hosts", json=payload.to_wire())
        raise_for_response(response)

    def configure_host(self, host: str, config: HostConfiguration) -> None:
        """Partially update a host.

        Only fields that were given are sent; the rest stay as they are on the
        platform.
        """
        payload = HostUpdatePayload(
            module=self.resolve_module(config.module),
            function=config.function,
            env=config.env,
        )
        response = self.client.post(f"/hosts/{host}", json=payload.to_wire())
        raise_for_response(response)

    def view_host(self, host: str) -> Any:
        response = self.client.get(f"/hosts/{host}")
        raise_for_response(response)
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Unexpected response for host '{host}': not JSON") from e

    def login(self, username: str, password: str) -> datetime:
        """Exchange a username and password for a stored login token.

        Returns:
            When the new token expires.
        """
        response = self.client.login(username, password)
        raise_for_response(response, "Login error: ")
        login = _decode(response, LoginResponse)
        entry = self.client.store.set(login.access_token, login.expires_in)
        return entry.expires_at

    def logout(self) -> None:
        self.client.store.delete()
