"""CLI commands for creating, updating and viewing hosts.

Usage:
    wasp host:create HOST CUSTOMER_ID [--module M] [--function F] [--env E]...
    wasp host:update HOST [--module M] [--function F] [--env E]...
    wasp host:get HOST

``--module`` accepts either a module id or a path to a local module. When the
value names a file that exists locally it is uploaded first and the new
module id is used instead; a local file therefore wins over a module id that
happens to have the same name.
"""

import json

import click

from ..platform.errors import WaspError
from ..platform.types import ClientContext, HostConfiguration
from . import configure_options, fail, source_options, workflow_for


@click.command("host:create")
@click.argument("host")
@click.argument("customer_id")
@configure_options
@source_options
def create_host(
    host: str, customer_id: str, config: HostConfiguration, context: ClientContext
) -> None:
    """Create a host.

    Examples:
        wasp host:create example.com cust_1 --module ./app.wasm --env FOO=bar
    """
    try:
        workflow_for(context).create_host(host, customer_id, config)
    except WaspError as e:
        fail(e)

    click.echo("Ok", err=True)


@click.command("host:update")
@click.argument("host")
@configure_options
@source_options
def update_host(host: str, config: HostConfiguration, context: ClientContext) -> None:
    """Configure a host.

    Only the options given are changed. Use --env NAME= to unset a variable.

    Examples:
        wasp host:update example.com --module m_42
        wasp host:update example.com --env API_KEY --env OLD_FLAG=
    """
    try:
        workflow_for(context).configure_host(host, config)
    except WaspError as e:
        fail(e)

    click.echo("Ok", err=True)


@click.command("host:get")
@click.argument("host")
@source_options
def get_host(host: str, context: ClientContext) -> None:
    """View a host."""
    try:
        data = workflow_for(context).view_host(host)
    except WaspError as e:
        fail(e)

    click.echo(json.dumps(data, indent=2))
