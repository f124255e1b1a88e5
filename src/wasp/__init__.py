"""wasp - deploy WASM modules to the wasp platform."""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("wasp-cli")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"

__all__ = ["__version__"]
