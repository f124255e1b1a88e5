"""Exception classes and response error handling for the wasp CLI."""

from __future__ import annotations

import requests
from pydantic import ValidationError

from .types import ErrorBody


class WaspError(Exception):
    """Base exception for all wasp CLI errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CredentialError(WaspError):
    """Problem reading or writing stored credentials."""


class CredentialNotFound(CredentialError):
    """No credential entry is stored for the requested account.

    Attributes:
        account: Account label the lookup was made for.
    """

    def __init__(self, message: str, account: str) -> None:
        self.account = account
        super().__init__(message)


class CredentialExpired(CredentialError):
    """The stored login token is past its expiry."""


class CorruptCredential(CredentialError):
    """The stored credential entry could not be decoded."""


class TransportError(WaspError):
    """The request never produced an HTTP response.

    Raised for DNS failures, refused connections and TLS errors.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class PlatformAPIError(WaspError):
    """Non-success HTTP response from the platform API.

    Attributes:
        status_code: HTTP status code from the API.
        message: Normalized error message, including any caller prefix.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)


class ModuleIOError(WaspError):
    """Local module file could not be read for upload."""


class DecodeError(WaspError):
    """A success response body did not have the expected shape."""


class ConfigurationError(WaspError):
    """Invalid local configuration."""


class RuntimeNotFound(WaspError):
    """No module runtime is installed for `wasp run`."""


def raise_for_response(response: requests.Response, context: str = "") -> None:
    """Raise PlatformAPIError if the response is not a success.

    The body of a failed response is read as text. A JSON body of the form
    ``{"error": "..."}`` contributes its error string; anything else is used
    verbatim.

    Args:
        response: Response returned by the API client.
        context: Prefix prepended verbatim to the error message.

    Raises:
        PlatformAPIError: If the response status is not a success.
    """
    if response.ok:
        return

    text = response.text
    try:
        message = ErrorBody.model_validate_json(text).error
    except ValidationError:
        message = text

    raise PlatformAPIError(response.status_code, f"{context}{message}")
