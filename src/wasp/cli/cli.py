#!/usr/bin/env python3
"""wasp CLI - deploy WASM modules to the wasp platform

Usage:
    wasp login USERNAME [--account NAME]
    wasp logout
    wasp upload MODULE_PATH
    wasp host:create HOST CUSTOMER_ID [--module M] [--function F] [--env E]...
    wasp host:update HOST [--module M] [--function F] [--env E]...
    wasp host:get HOST
    wasp run MODULE
"""

import logging
import sys

import click

from .. import __version__
from .commands.host import create_host, get_host, update_host
from .commands.login import login
from .commands.logout import logout
from .commands.run import run_module
from .commands.upload import upload
from .platform.config import DEBUG


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or DEBUG else logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # requests/urllib3 would otherwise log full URLs at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log requests and credential lookups")
def cli(verbose: bool):
    """wasp CLI - deploy WASM modules to the wasp platform"""
    _configure_logging(verbose)


# Authentication
cli.add_command(login)
cli.add_command(logout)

# Modules and hosts
cli.add_command(upload)
cli.add_command(create_host)
cli.add_command(update_host)
cli.add_command(get_host)

# Local run mode
cli.add_command(run_module)


def main():
    """Main entry point for the CLI."""
    # Commands report WaspError themselves; see commands.fail
    try:
        cli()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
