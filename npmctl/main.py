"""
npmctl CLI.

Command-line client for the Nginx Proxy Manager API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    npmctl --help
    npmctl list
    npmctl create --domain example.com --forward-host 192.168.1.100 --forward-port 8080
    npmctl delete --id 3

Global options:
    --api-url, -a     API base URL (env: NPM_API_URL)
    --username, -u    Login identity (env: NPM_USERNAME)
    --password, -p    Login secret (env: NPM_PASSWORD)
    --verbose, -v     Log INFO to stderr
    --debug, -d       Log DEBUG to stderr
    --log-file        Also write JSON log records to a file
"""

from pathlib import Path
from typing import Optional

import typer

from npmctl import __version__
from npmctl.commands.base import console
from npmctl.commands.hosts import create_host, delete_host, list_hosts
from npmctl.core.config import DEFAULT_API_URL, resolve_config
from npmctl.core.logging import setup_logging

app = typer.Typer(
    name="npmctl",
    help="A CLI tool for managing Nginx Proxy Manager proxy hosts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("list")(list_hosts)
app.command("create")(create_host)
app.command("delete")(delete_host)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"npmctl {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    api_url: str = typer.Option(
        DEFAULT_API_URL,
        "--api-url",
        "-a",
        help="Nginx Proxy Manager API URL",
    ),
    username: str = typer.Option(
        "",
        "--username",
        "-u",
        help="Username for authentication",
    ),
    password: str = typer.Option(
        "",
        "--password",
        "-p",
        help="Password for authentication",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Append JSON log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    A command line interface for the Nginx Proxy Manager API.

    Credentials fall back to NPM_USERNAME / NPM_PASSWORD and the API URL
    to NPM_API_URL when not given on the command line.
    """
    if debug:
        setup_logging(level="DEBUG", enable_console=True, log_file=log_file)
    elif verbose:
        setup_logging(level="INFO", enable_console=True, log_file=log_file)
    else:
        setup_logging(log_file=log_file)

    ctx.obj = resolve_config(api_url=api_url, username=username, password=password)


if __name__ == "__main__":
    app()
