import sys
from contextlib import contextmanager

import click
import httpx
import simplejson as json
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from qprotocol.restful import RestfulClient
from qprotocol.types import CommsError, StatusCode, is_benign
from qprotocol.util import (
    DEFAULT_LOGLEVEL,
    add_traffic_sink,
    format_error_response,
    shutdown_client_log,
    start_client_log,
)


def print_tree(cmd, prefix="", parent_ctx=None):
    """Print command tree starting from given command."""
    ctx = click.Context(cmd, info_name=cmd.name, parent=parent_ctx)

    # Only print root name if no parent
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


def _parse_params(ctx, param, values):
    params = []
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}")
        params.append((name, value))
    return params


def request_options(f):
    """Arguments and options shared by all request commands."""
    f = click.option(
        "--traffic-log",
        "-tl",
        type=click.Path(dir_okay=False),
        default=None,
        help="Record every request and response to this file",
    )(f)
    f = click.option(
        "--log-file",
        "-lf",
        type=click.Path(dir_okay=False),
        default=None,
        help="Write the client log to this file (default: no file log)",
    )(f)
    f = click.option(
        "--log-to-stdout/--no-log-to-stdout",
        "-lts/",
        default=False,
        help="Enable/disable console logging (default: disabled)",
    )(f)
    f = click.option(
        "--log-level",
        "-ll",
        default=DEFAULT_LOGLEVEL,
        help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR) (default: INFO)",
    )(f)
    f = click.option(
        "--param",
        "-p",
        "params",
        multiple=True,
        callback=_parse_params,
        help="Query parameter as name=value, sent unescaped (repeatable)",
    )(f)
    f = click.argument("endpoint")(f)
    f = click.argument("url")(f)
    return f


@contextmanager
def _client_session(url, log_level, log_to_stdout, log_file, traffic_log):
    start_client_log(
        log_to_file=log_file is not None,
        log_to_stdout=log_to_stdout,
        log_path=log_file,
        log_level=log_level,
    )
    if traffic_log is not None:
        add_traffic_sink(traffic_log)
    client = RestfulClient(url)
    try:
        yield client
    except (CommsError, httpx.TransportError) as e:
        logger.debug(format_error_response())
        click.echo(f"Error: {e}", err=True)
        if client.last_response:
            click.echo(f"Last response: {client.last_response}", err=True)
        sys.exit(1)
    finally:
        shutdown_client_log()


@click.group()
@tree_option
def cli():
    """qprotocol - command line access to a QServer instrument controller.

    Sends single PUT/GET/DELETE requests and reports the server's status:

    - Exit code 0 when the server reports a benign status

    - Exit code 1 on timeouts, unsupported HTTP codes or failure statuses
    """
    pass


@cli.command()
@request_options
def get(url, endpoint, params, **log_opts):
    """GET ENDPOINT from the server at URL and print the body.

    JSON bodies are pretty-printed, anything else is printed as received.
    """
    with _client_session(url, **log_opts) as client:
        text = client.get_text(endpoint, parameters=params)
        try:
            text = json.dumps(json.loads(text), indent=2)
        except json.JSONDecodeError:
            pass
        click.echo(text)


@cli.command()
@request_options
@click.option(
    "--body",
    "-b",
    default="null",
    help="JSON request body (default: null)",
)
def put(url, endpoint, params, body, **log_opts):
    """PUT a JSON body to ENDPOINT on the server at URL."""
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise click.BadParameter(str(e), param_hint="--body")
    with _client_session(url, **log_opts) as client:
        client.put(endpoint, body=payload, parameters=params)
        click.echo("OK")


@cli.command()
@request_options
def delete(url, endpoint, params, **log_opts):
    """DELETE ENDPOINT on the server at URL."""
    with _client_session(url, **log_opts) as client:
        client.delete(endpoint, parameters=params)
        click.echo("OK")


@cli.command()
@request_options
def status(url, endpoint, params, **log_opts):
    """GET ENDPOINT and show the status it reports, without failing on it."""
    with _client_session(url, **log_opts) as client:
        envelope = client.get_status(endpoint, parameters=params)
    if isinstance(envelope.status_code, StatusCode):
        name = envelope.status_code.wire_name
    else:
        name = f"unknown ({envelope.status_code})"
    colour = "green" if envelope.is_benign else "red"
    console = Console(color_system="standard")
    console.print(
        Panel(
            f"[{colour}]{name}[/{colour}]\n{envelope.message}",
            title=f"{endpoint} {envelope.type_code}".strip(),
            border_style="blue",
        )
    )


@cli.command()
def codes():
    """List the status codes QServer reports."""
    console = Console(color_system="standard")
    table = Table(show_header=True, box=None)
    table.add_column("Code")
    table.add_column("Name")
    table.add_column("Outcome")
    for code in StatusCode:
        outcome = "[green]ok[/green]" if is_benign(code) else "[red]failure[/red]"
        table.add_row(str(code.value), code.wire_name, outcome)
    console.print(table)
