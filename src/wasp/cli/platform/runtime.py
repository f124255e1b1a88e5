"""Hand-off to the locally installed module runtime for `wasp run`.

The runtime is a separate distribution that registers a callable under the
``wasp.runtime`` entry-point group. It receives a :class:`RunConfig` and
serves the module until the process is stopped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from importlib.metadata import entry_points
from pathlib import Path

from dotenv import dotenv_values

from .config import RUNTIME_ENTRY_POINT_GROUP
from .errors import ConfigurationError, RuntimeNotFound
from .types import RunConfig

logger = logging.getLogger(__name__)

Runtime = Callable[[RunConfig], None]


def load_env_file(path: str | Path) -> dict[str, str]:
    """Read variables from a dotenv file.

    Variables declared without a value are dropped.

    Raises:
        ConfigurationError: If the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Could not load env file {path}")
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def find_runtime() -> Runtime:
    """Load the first installed runtime entry point.

    Raises:
        RuntimeNotFound: If no runtime is installed.
    """
    candidates = list(entry_points(group=RUNTIME_ENTRY_POINT_GROUP))
    if not candidates:
        raise RuntimeNotFound(
            "No module runtime is installed. Install a package that "
            f"provides the '{RUNTIME_ENTRY_POINT_GROUP}' entry point."
        )
    ep = candidates[0]
    logger.debug("Using runtime %s (%s)", ep.name, ep.value)
    return ep.load()


def start(config: RunConfig, runtime: Runtime | None = None) -> None:
    """Serve a module locally.

    Blocks until the runtime returns.
    """
    runtime = runtime or find_runtime()
    logger.debug("Starting %s:%s on port %d", config.module, config.function, config.port)
    runtime(config)
