"""Login token storage with expiry.

Tokens are stored per (service, account) pair, where the service is the API
base URL and the account is the label passed with ``--account``. The entry is
validated on every read; an expired token is reported, never returned.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Protocol

import keyring
import keyring.errors
from pydantic import ValidationError

from . import config
from .errors import (
    ConfigurationError,
    CorruptCredential,
    CredentialError,
    CredentialExpired,
    CredentialNotFound,
)
from .types import CredentialEntry

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SecretBackend(Protocol):
    """Persistent string storage keyed by (service, account)."""

    def set_secret(self, service: str, account: str, secret: str) -> None: ...

    def get_secret(self, service: str, account: str) -> str | None: ...

    def delete_secret(self, service: str, account: str) -> None:
        """Remove a secret, raising KeyError if none is stored."""
        ...


class KeyringBackend:
    """OS key chain / credential manager via the keyring library."""

    def set_secret(self, service: str, account: str, secret: str) -> None:
        try:
            keyring.set_password(service, account, secret)
        except keyring.errors.KeyringError as e:
            raise CredentialError(f"Could not save login token: {e}") from e

    def get_secret(self, service: str, account: str) -> str | None:
        try:
            return keyring.get_password(service, account)
        except keyring.errors.KeyringError as e:
            raise CredentialError(f"Could not read login token: {e}") from e

    def delete_secret(self, service: str, account: str) -> None:
        try:
            keyring.delete_password(service, account)
        except keyring.errors.PasswordDeleteError as e:
            raise KeyError(account) from e
        except keyring.errors.KeyringError as e:
            raise CredentialError(f"Could not remove login token: {e}") from e


class FileBackend:
    """JSON file readable only by the owner.

    Layout: ``{service: {account: secret}}``.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or config.CREDENTIALS_FILE

    def _load(self) -> dict[str, dict[str, str]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise CorruptCredential(
                f"Could not read {self.path}: {e}. Remove it and log in again."
            ) from e
        if not isinstance(data, dict):
            raise CorruptCredential(
                f"{self.path} is not a JSON object. Remove it and log in again."
            )
        return data

    def _save(self, data: dict[str, dict[str, str]]) -> None:
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True))
        # Restrict permissions to owner only
        tmp_path.chmod(0o600)
        tmp_path.replace(self.path)

    def set_secret(self, service: str, account: str, secret: str) -> None:
        data = self._load()
        data.setdefault(service, {})[account] = secret
        self._save(data)

    def get_secret(self, service: str, account: str) -> str | None:
        return self._load().get(service, {}).get(account)

    def delete_secret(self, service: str, account: str) -> None:
        data = self._load()
        accounts = data.get(service, {})
        del accounts[account]
        if not accounts:
            data.pop(service, None)
        self._save(data)


class EnvironmentBackend:
    """Read-only backend serving a token injected through the environment.

    Meant for CI, where no key chain exists. The token never expires locally;
    the server still rejects it once it is revoked.
    """

    def __init__(self, env_var: str = config.TOKEN_ENV_VAR) -> None:
        self.env_var = env_var

    def set_secret(self, service: str, account: str, secret: str) -> None:
        raise CredentialError(
            f"Cannot store a login token while using ${self.env_var}. "
            "Unset WASP_CREDENTIAL_BACKEND to log in interactively."
        )

    def get_secret(self, service: str, account: str) -> str | None:
        token = os.environ.get(self.env_var)
        if not token:
            return None
        entry = CredentialEntry(
            access_token=token, expires_at=datetime.max.replace(tzinfo=timezone.utc)
        )
        return entry.model_dump_json()

    def delete_secret(self, service: str, account: str) -> None:
        raise CredentialError(
            f"Login token comes from ${self.env_var}; unset it to log out."
        )


BACKENDS: dict[str, Callable[[], SecretBackend]] = {
    "keyring": KeyringBackend,
    "file": FileBackend,
    "env": EnvironmentBackend,
}


def get_backend(name: str | None = None) -> SecretBackend:
    """Return the credential backend selected by name or configuration.

    Args:
        name: Backend name. Defaults to ``WASP_CREDENTIAL_BACKEND``.

    Raises:
        ConfigurationError: If the name is not a known backend.
    """
    name = name or config.CREDENTIAL_BACKEND
    try:
        factory = BACKENDS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown credential backend '{name}'. "
            f"Choose one of: {', '.join(sorted(BACKENDS))}"
        ) from None
    return factory()


class CredentialStore:
    """Token storage for one (service, account) pair."""

    def __init__(
        self,
        service: str,
        account: str = config.DEFAULT_ACCOUNT,
        backend: SecretBackend | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            service: Service label, normally the API base URL.
            account: Account label chosen by the user.
            backend: Where entries are persisted. Defaults to the configured
                backend.
            clock: Returns the current time as an aware UTC datetime.
        """
        self.service = service
        self.account = account
        self.backend = backend if backend is not None else get_backend()
        self.clock = clock or utcnow

    def _login_hint(self, username: bool = True) -> str:
        command = "wasp login USERNAME" if username else "wasp login"
        if self.account != config.DEFAULT_ACCOUNT:
            command += f" --account {self.account}"
        return f"`{command}`"

    def _not_found(self) -> CredentialNotFound:
        return CredentialNotFound(
            f"No account found. Log in with {self._login_hint()}.", self.account
        )

    def _read(self) -> CredentialEntry:
        raw = self.backend.get_secret(self.service, self.account)
        if raw is None:
            raise self._not_found()
        try:
            return CredentialEntry.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptCredential(
                f"Stored login token is unreadable. Log in again with {self._login_hint()}."
            ) from e

    def set(self, token: str, ttl_seconds: int) -> CredentialEntry:
        """Store a token that expires ``ttl_seconds`` from now.

        Any entry already stored for this account is replaced.

        Raises:
            CredentialError: If the expiry falls outside the datetime range.
        """
        try:
            expires_at = self.clock() + timedelta(seconds=ttl_seconds)
        except OverflowError as e:
            raise CredentialError(
                f"Token lifetime of {ttl_seconds} seconds is out of range"
            ) from e
        entry = CredentialEntry(access_token=token, expires_at=expires_at)
        self.backend.set_secret(self.service, self.account, entry.model_dump_json())
        logger.debug(
            "Stored token for %s@%s until %s",
            self.account,
            self.service,
            entry.expires_at.isoformat(),
        )
        return entry

    def get(self) -> str:
        """Return the stored token if it is still valid.

        Raises:
            CredentialNotFound: If nothing is stored for this account.
            CredentialExpired: If the stored token has expired.
            CorruptCredential: If the stored entry cannot be decoded.
        """
        entry = self._read()
        if entry.expires_at <= self.clock():
            raise CredentialExpired(
                f"Login token is expired. Log in again with {self._login_hint(username=False)}."
            )
        return entry.access_token

    def delete(self) -> None:
        """Remove the stored entry.

        Raises:
            CredentialNotFound: If nothing is stored for this account.
        """
        try:
            self.backend.delete_secret(self.service, self.account)
        except KeyError:
            raise self._not_found() from None
        logger.debug("Removed token for %s@%s", self.account, self.service)
