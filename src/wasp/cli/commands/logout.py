"""Remove the stored login token.

Usage:
    wasp logout                  # Forget the default account
    wasp logout --account work   # Forget a named account
"""

import click

from ..platform.errors import WaspError
from ..platform.types import ClientContext
from . import fail, source_options, workflow_for


@click.command()
@source_options
def logout(context: ClientContext) -> None:
    """Remove local wasp credentials."""
    try:
        workflow_for(context).logout()
    except WaspError as e:
        fail(e)

    click.echo("Ok", err=True)
