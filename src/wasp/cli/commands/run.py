"""Run a wasp module locally.

The `wasp run` command hands the module to the installed module runtime,
which serves it over HTTP until interrupted.

Usage:
    wasp run app.wasm                       # Serve `run` on port 5000
    wasp run app.wasm -f handle -p 8080     # Custom entry function and port
    wasp run app.wasm -e .env -c ./public   # With env file and CDN directory
"""

import click

from ..platform import runtime
from ..platform.errors import WaspError
from ..platform.types import RunConfig
from . import fail


@click.command("run")
@click.argument("module", type=click.Path(exists=True, dir_okay=False))
@click.option("--function", "-f", default="run", show_default=True, help="Entry function name")
@click.option("--port", "-p", default=5000, show_default=True, type=int, help="Port to listen on")
@click.option("--env-file", "-e", default=None, help="Load environment variables from a .env file")
@click.option("--cdn-directory", "-c", default=None, help="Directory served as the public CDN")
@click.option(
    "--protected-cdn-directory",
    "-P",
    default=None,
    help="Directory served as the protected CDN",
)
@click.option(
    "--kvs-directory",
    "-k",
    default=".db",
    show_default=True,
    help="Directory for the key-value store",
)
def run_module(
    module: str,
    function: str,
    port: int,
    env_file: str | None,
    cdn_directory: str | None,
    protected_cdn_directory: str | None,
    kvs_directory: str,
) -> None:
    """Run a wasp module locally."""
    try:
        config = RunConfig(
            module=module,
            function=function,
            port=port,
            cdn_directory=cdn_directory,
            protected_cdn_directory=protected_cdn_directory,
            kvs_directory=kvs_directory,
            env=runtime.load_env_file(env_file) if env_file else {},
        )
        runtime.start(config)
    except WaspError as e:
        fail(e)
