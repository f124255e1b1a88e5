"""Platform API configuration constants."""

import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PLATFORM_API_URL = os.environ.get("WASP_API_URL", "https://api.example-platform.test")
DEFAULT_ACCOUNT = "default"
ACCOUNT = os.environ.get("WASP_ACCOUNT", DEFAULT_ACCOUNT)

WASP_CONFIG_DIR = Path(os.environ.get("WASP_CONFIG_DIR", Path.home() / ".wasp"))
CREDENTIALS_FILE = WASP_CONFIG_DIR / "credentials.json"

# One of "keyring", "file" or "env"
CREDENTIAL_BACKEND = os.environ.get("WASP_CREDENTIAL_BACKEND", "keyring")
TOKEN_ENV_VAR = "WASP_TOKEN"

DEBUG = os.environ.get("WASP_DEBUG", "").lower() in ("1", "true", "yes")

try:
    CLI_VERSION = version("wasp-cli")
except PackageNotFoundError:
    CLI_VERSION = "unknown"
USER_AGENT = f"wasp-cli/{CLI_VERSION}"

RUNTIME_ENTRY_POINT_GROUP = "wasp.runtime"
