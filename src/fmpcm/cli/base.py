import asyncio
from functools import wraps

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from fmpcm._version import __version__
from fmpcm.client import Session
from fmpcm.types import CallError, CommsError
from fmpcm.util import (
    DEFAULT_HOST_ADDR,
    DEFAULT_LOGLEVEL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    format_error_response,
    parse_address,
    shutdown_client_log,
    start_client_log,
)

DEFAULT_ADDRESS = f"{DEFAULT_HOST_ADDR}:{DEFAULT_PORT}"


def print_tree(cmd, prefix="", parent_ctx=None):
    """Print command tree starting from given command."""
    ctx = click.Context(cmd, info_name=cmd.name, parent=parent_ctx)

    if not parent_ctx:
        click.echo(cmd.name)

    for sub in sorted(cmd.list_commands(ctx)):
        sub_cmd = cmd.get_command(ctx, sub)
        click.echo(f"{prefix}└── {sub}")
        if isinstance(sub_cmd, click.Group):
            print_tree(sub_cmd, prefix + "    ", ctx)


def tree_option(f):
    """Add --tree option to command."""

    def callback(ctx, param, value):
        if not value or ctx.resilient_parsing:
            return
        print_tree(ctx.command)
        ctx.exit()

    return click.option(
        "--tree",
        is_flag=True,
        help="Show command tree from this point",
        expose_value=False,
        is_eager=True,
        callback=callback,
    )(f)


def connection_options(f):
    """Service address and logging options shared by the service commands."""
    f = click.option(
        "--log-level",
        "-ll",
        default=DEFAULT_LOGLEVEL,
        help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR) (default: INFO)",
    )(f)
    f = click.option(
        "--log-to-stdout/--no-log-to-stdout",
        "-lts/",
        default=False,
        help="Enable/disable console logging (default: disabled)",
    )(f)
    f = click.option(
        "--address",
        "-a",
        default=DEFAULT_ADDRESS,
        show_default=True,
        help="FreeMASTER service address, host:port",
    )(f)
    return f


def make_session(address: str) -> Session:
    # the CLI has no on_server_error consumer, fail the awaiting command instead
    return Session(address, reject_on_server_error=True)


def run_service_command(coro_fn):
    """Run an async command body against a fresh session.

    Sets up logging, opens the session, runs `coro_fn(client, **kwargs)` and
    turns connection and call failures into click errors.
    """

    @wraps(coro_fn)
    def wrapper(address, log_to_stdout, log_level, **kwargs):
        try:
            parse_address(address)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="'--address'")

        start_client_log(
            log_to_file=False,
            log_to_stdout=log_to_stdout,
            clear_prev=False,
            log_level=log_level,
        )

        async def main():
            async with make_session(address) as session:
                return await coro_fn(session.client, **kwargs)

        try:
            return asyncio.run(main())
        except (CommsError, OSError, asyncio.TimeoutError) as e:
            logger.error(format_error_response())
            raise click.ClickException(f"{type(e).__name__}: {e}")
        finally:
            shutdown_client_log()

    return wrapper


async def _wait(fut):
    return await asyncio.wait_for(fut, DEFAULT_TIMEOUT)


@click.group()
@tree_option
def cli():
    """fmpcm - FreeMASTER JSON-RPC client.

    Talks to a FreeMASTER Lite service (or the full FreeMASTER application)
    over its WebSocket JSON-RPC interface.
    """
    pass


@cli.command()
@connection_options
@run_service_command
async def version(pcm):
    """Print the service version."""
    ver = await _wait(pcm.get_app_version())
    click.echo(f"FreeMASTER service {ver} (fmpcm {__version__})")


@cli.command()
@connection_options
@run_service_command
async def ports(pcm):
    """List the communication ports defined in the service project."""
    console = Console(color_system="standard")
    table = Table(title="Communication ports")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Connection")

    index = 0
    while True:
        try:
            name = await _wait(pcm.enum_comm_ports(index))
        except CallError:
            break  # past the last port
        try:
            info = await _wait(pcm.get_comm_port_info(name))
        except CallError as e:
            logger.warning("No info for port {}: {}", name, e.error)
            info = {}
        if not isinstance(info, dict):
            info = {}
        table.add_row(
            str(index),
            str(name),
            str(info.get("description", "")),
            str(info.get("connection_string", "")),
        )
        index += 1

    if index == 0:
        click.echo("No communication ports defined.")
    else:
        console.print(table)


@cli.command()
@click.argument("variable")
@connection_options
@run_service_command
async def read(pcm, variable):
    """Read a project VARIABLE."""
    value = await _wait(pcm.read_variable(variable))
    click.echo(f"{variable} = {value}")


@cli.command()
@click.argument("variables", nargs=-1, required=True)
@click.option(
    "--duration",
    "-d",
    default=10.0,
    type=float,
    show_default=True,
    help="Seconds to watch for",
)
@click.option(
    "--interval",
    "-i",
    default=100,
    type=int,
    show_default=True,
    help="Sampling period requested from the service, in ms",
)
@connection_options
@run_service_command
async def watch(pcm, variables, duration, interval):
    """Print changes of VARIABLES (full FreeMASTER application only).

    Activates the extended features, enables server events and subscribes to
    each variable for the given duration.
    """
    ext = pcm.activate()

    def on_variable_changed(name, sub_id, value):
        click.echo(f"{name} = {value}")

    ext.on_variable_changed = on_variable_changed
    await _wait(ext.enable_events(True))
    sub_ids = [await _wait(ext.subscribe_variable(v, interval)) for v in variables]
    logger.info("Subscribed {} as {}", variables, sub_ids)
    try:
        await asyncio.sleep(duration)
    finally:
        for sub_id in sub_ids:
            await _wait(ext.unsubscribe_variable(sub_id))
        ext.on_variable_changed = None
