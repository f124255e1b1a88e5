"""Log in to the wasp platform.

The `wasp login` command exchanges a username and password for a login
token and stores it in the OS key chain under the chosen account label.

Usage:
    wasp login alice                   # Log in as the default account
    wasp login alice --account work    # Keep a second login side by side
"""

import click

from ..platform.errors import WaspError
from ..platform.types import ClientContext
from ..utils import format_timestamp
from . import fail, source_options, workflow_for


@click.command()
@click.argument("username")
@source_options
def login(username: str, context: ClientContext) -> None:
    """Log in and store a login token.

    The password is prompted for and never echoed. A new login replaces any
    token already stored for the same account.

    Examples:
        wasp login alice
        wasp login alice --account staging --api https://api.staging.example
    """
    password = click.prompt("Password", hide_input=True, err=True)

    try:
        expires_at = workflow_for(context).login(username, password)
    except WaspError as e:
        fail(e)

    click.echo("Ok", err=True)
    click.echo(f"Token valid until {format_timestamp(expires_at)}", err=True)
