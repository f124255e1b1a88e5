"""Upload a WASM module and print its module id."""

import click

from ..platform.errors import WaspError
from ..platform.types import ClientContext
from . import fail, source_options, workflow_for


@click.command()
@click.argument("module_path", type=click.Path(dir_okay=False))
@source_options
def upload(module_path: str, context: ClientContext) -> None:
    """Upload a WASM module.

    The module id issued by the platform is printed on stdout so it can be
    captured by scripts:

        MODULE=$(wasp upload ./app.wasm)
    """
    try:
        module_id = workflow_for(context).upload(module_path)
    except WaspError as e:
        fail(e)

    click.echo(module_id)
