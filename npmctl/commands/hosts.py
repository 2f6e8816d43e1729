"""
Proxy Host Commands.

list, create and delete. Each command validates its own inputs, then
authenticates once and makes a single resource call.
"""

import asyncio
from enum import Enum

import typer

from npmctl.client import ProxyManagerClient
from npmctl.commands.base import console, get_cli_config, handle_errors, stage
from npmctl.core.config import CLIConfig
from npmctl.core.exceptions import ValidationError
from npmctl.schemas.proxy_host import ProxyHost, ProxyHostCreate

SEPARATOR = "---"


class Scheme(str, Enum):
    http = "http"
    https = "https"


def _client(config: CLIConfig) -> ProxyManagerClient:
    return ProxyManagerClient(config.api_url, timeout=config.timeout)


async def _authenticate(client: ProxyManagerClient, config: CLIConfig) -> None:
    with stage("authentication failed"):
        await client.authenticate(config.username, config.password)


# =============================================================================
# list
# =============================================================================


def list_hosts(ctx: typer.Context) -> None:
    """
    List all proxy hosts.

    Examples:
        npmctl list
        npmctl -a http://npm:81/api -u admin@example.com -p secret list
    """
    config = get_cli_config(ctx)

    with handle_errors():
        hosts = asyncio.run(_list(config))

    _display_hosts(hosts)


async def _list(config: CLIConfig) -> list[ProxyHost]:
    """Async implementation of list command."""
    async with _client(config) as client:
        await _authenticate(client, config)
        with stage("failed to list proxy hosts"):
            return await client.list_hosts()


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _display_hosts(hosts: list[ProxyHost]) -> None:
    console.print(f"Found {len(hosts)} proxy hosts:")
    console.print()
    for host in hosts:
        console.print(f"ID: {host.id}", markup=False)
        console.print(f"Domain Names: {', '.join(host.domain_names)}", markup=False)
        console.print(f"Forward: {host.forward_target}", markup=False)
        console.print(f"Enabled: {_flag(host.enabled)}")
        console.print(f"SSL Forced: {_flag(host.ssl_forced)}")
        console.print(SEPARATOR)


# =============================================================================
# create
# =============================================================================


def create_host(
    ctx: typer.Context,
    domain: str = typer.Option("", "--domain", help="Domain name for the proxy host"),
    forward_host: str = typer.Option("", "--forward-host", help="Forward host"),
    forward_port: int = typer.Option(0, "--forward-port", help="Forward port"),
    forward_scheme: Scheme = typer.Option(Scheme.http, "--forward-scheme", help="Forward scheme"),
) -> None:
    """
    Create a new proxy host.

    The host is created enabled, with exploit blocking turned on.

    Examples:
        npmctl create --domain example.com --forward-host 192.168.1.100 --forward-port 8080
        npmctl create --domain secure.example.com --forward-host app --forward-port 443 --forward-scheme https
    """
    config = get_cli_config(ctx)

    with handle_errors():
        host = build_host(domain, forward_host, forward_port, forward_scheme.value)
        created = asyncio.run(_create(config, host))

    console.print(f"Successfully created proxy host with ID: {created.id}")
    console.print(f"Domain: {', '.join(created.domain_names)}", markup=False)
    console.print(f"Forward: {created.forward_target}", markup=False)


def build_host(domain: str, forward_host: str, forward_port: int, forward_scheme: str = "http") -> ProxyHostCreate:
    """
    Validate create inputs and build the request body.

    Raises:
        ValidationError: If a required input is missing or out of range
    """
    domain = domain.strip()
    forward_host = forward_host.strip()

    missing = [
        name
        for name, present in (
            ("domain", bool(domain)),
            ("forward-host", bool(forward_host)),
            ("forward-port", forward_port != 0),
        )
        if not present
    ]
    if missing:
        raise ValidationError(
            "domain, forward-host, and forward-port are required",
            details={"missing": missing},
        )
    if forward_port < 0:
        raise ValidationError(
            f"forward-port must be a positive integer, got {forward_port}",
            details={"forward_port": forward_port},
        )

    return ProxyHostCreate(
        domain_names=[domain],
        forward_scheme=forward_scheme,
        forward_host=forward_host,
        forward_port=forward_port,
        enabled=True,
        block_exploits=True,
    )


async def _create(config: CLIConfig, host: ProxyHostCreate) -> ProxyHost:
    """Async implementation of create command."""
    async with _client(config) as client:
        await _authenticate(client, config)
        with stage("failed to create proxy host"):
            return await client.create_host(host)


# =============================================================================
# delete
# =============================================================================


def delete_host(
    ctx: typer.Context,
    host_id: int = typer.Option(0, "--id", help="ID of the proxy host to delete"),
) -> None:
    """
    Delete a proxy host by ID.

    Examples:
        npmctl delete --id 3
    """
    config = get_cli_config(ctx)

    with handle_errors():
        if host_id == 0:
            raise ValidationError("id is required", details={"missing": ["id"]})
        if host_id < 0:
            raise ValidationError(f"id must be a positive integer, got {host_id}", details={"id": host_id})
        asyncio.run(_delete(config, host_id))

    console.print(f"Successfully deleted proxy host with ID: {host_id}")


async def _delete(config: CLIConfig, host_id: int) -> None:
    """Async implementation of delete command."""
    async with _client(config) as client:
        await _authenticate(client, config)
        with stage("failed to delete proxy host"):
            await client.delete_host(host_id)
