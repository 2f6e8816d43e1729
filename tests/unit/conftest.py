"""
Unit Test Fixtures.

Fixtures for unit tests - the remote API is always the in-memory stub.
Unit tests should be fast and isolated, never touching the network.
"""

import pytest
from typer.testing import CliRunner

from npmctl.client import ProxyManagerClient
from npmctl.core.config import CLIConfig


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_stub(stub, monkeypatch: pytest.MonkeyPatch):
    """
    Route every client the commands build through the stub server.

    Usage:
        def test_list(runner, cli_stub):
            result = runner.invoke(app, ["-u", "admin", "-p", "pw", "list"])
            assert len(cli_stub.requests) == 2
    """
    built: list[ProxyManagerClient] = []

    def _client(config: CLIConfig) -> ProxyManagerClient:
        client = ProxyManagerClient(config.api_url, timeout=config.timeout, transport=stub.transport)
        built.append(client)
        return client

    monkeypatch.setattr("npmctl.commands.hosts._client", _client)
    stub.built_clients = built
    return stub
