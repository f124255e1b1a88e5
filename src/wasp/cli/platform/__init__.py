"""wasp platform API client, credential store and deploy workflow."""

from .client import PlatformClient
from .config import DEFAULT_ACCOUNT, PLATFORM_API_URL
from .credentials import (
    CredentialStore,
    EnvironmentBackend,
    FileBackend,
    KeyringBackend,
    SecretBackend,
    get_backend,
)
from .deploy import DeployWorkflow, parse_env
from .errors import (
    ConfigurationError,
    CorruptCredential,
    CredentialError,
    CredentialExpired,
    CredentialNotFound,
    DecodeError,
    ModuleIOError,
    PlatformAPIError,
    RuntimeNotFound,
    TransportError,
    WaspError,
    raise_for_response,
)
from .runtime import start
from .types import (
    ClientContext,
    CredentialEntry,
    HostConfiguration,
    HostCreatePayload,
    HostUpdatePayload,
    RunConfig,
)

__all__ = [
    # Credentials
    "CredentialStore",
    "SecretBackend",
    "KeyringBackend",
    "FileBackend",
    "EnvironmentBackend",
    "get_backend",
    # Client
    "PlatformClient",
    # Deploy
    "DeployWorkflow",
    "parse_env",
    # Run mode
    "start",
    # Config
    "PLATFORM_API_URL",
    "DEFAULT_ACCOUNT",
    # Errors
    "WaspError",
    "CredentialError",
    "CredentialNotFound",
    "CredentialExpired",
    "CorruptCredential",
    "TransportError",
    "PlatformAPIError",
    "ModuleIOError",
    "DecodeError",
    "ConfigurationError",
    "RuntimeNotFound",
    "raise_for_response",
    # Types
    "ClientContext",
    "CredentialEntry",
    "HostConfiguration",
    "HostCreatePayload",
    "HostUpdatePayload",
    "RunConfig",
]
