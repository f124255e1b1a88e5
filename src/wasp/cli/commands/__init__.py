"""Options and helpers shared by wasp commands."""

import functools
import sys
from collections.abc import Callable
from typing import NoReturn

import click

from ..platform.client import PlatformClient
from ..platform.config import ACCOUNT, PLATFORM_API_URL
from ..platform.deploy import DeployWorkflow, parse_env
from ..platform.errors import PlatformAPIError, WaspError
from ..platform.types import ClientContext, HostConfiguration


def source_options(f: Callable) -> Callable:
    """Add --api and --account, passing a ClientContext as ``context``."""

    @click.option(
        "--api",
        "-a",
        default=PLATFORM_API_URL,
        show_default=True,
        help="Platform API base URL",
    )
    @click.option(
        "--account",
        "-A",
        default=ACCOUNT,
        show_default=True,
        help="Account label the login token is stored under",
    )
    @functools.wraps(f)
    def wrapper(*args, api: str, account: str, **kwargs):
        return f(*args, context=ClientContext(api_url=api, account=account), **kwargs)

    return wrapper


def _collect_env(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> dict[str, str | None]:
    env: dict[str, str | None] = {}
    for token in value:
        try:
            name, parsed = parse_env(token)
        except ValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param) from e
        env[name] = parsed
    return env


def configure_options(f: Callable) -> Callable:
    """Add --module, --function and --env, passing a HostConfiguration as ``config``."""

    @click.option(
        "--module",
        "-m",
        default=None,
        help="Module id, or path to a local module to upload (an existing local path wins)",
    )
    @click.option("--function", "-f", default=None, help="Entry function name")
    @click.option(
        "--env",
        "-e",
        multiple=True,
        callback=_collect_env,
        help="NAME=VALUE, NAME= to unset, or NAME to copy from the local environment",
    )
    @functools.wraps(f)
    def wrapper(*args, module: str | None, function: str | None, env: dict, **kwargs):
        config = HostConfiguration(module=module, function=function, env=env)
        return f(*args, config=config, **kwargs)

    return wrapper


STATUS_HINTS = {
    401: "Hint: Run 'wasp login USERNAME' to authenticate.",
    403: "Hint: You don't have permission for this action.",
    404: "Hint: Check the host name and try again.",
    500: "Hint: This is a server issue. Please try again later.",
    502: "Hint: The server is temporarily unavailable. Please try again later.",
    503: "Hint: The service is temporarily unavailable. Please try again later.",
}


def workflow_for(context: ClientContext) -> DeployWorkflow:
    return DeployWorkflow(PlatformClient(context), progress=_progress)


def _progress(message: str) -> None:
    click.echo(message, err=True)


def fail(e: WaspError) -> NoReturn:
    """Report an error on stderr, with a hint for known API statuses, and exit 1."""
    click.echo(f"Error: {e.message}", err=True)
    if isinstance(e, PlatformAPIError):
        hint = STATUS_HINTS.get(e.status_code)
        if hint:
            click.echo(hint, err=True)
    sys.exit(1)
