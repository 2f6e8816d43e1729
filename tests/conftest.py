"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

The stub server:
    StubProxyManager answers the four Nginx Proxy Manager endpoints through
    httpx.MockTransport and records every request, so tests can assert on
    bodies, headers, and call counts without a network.
"""

import json
import logging
from collections.abc import Generator
from typing import Any

import httpx
import pytest
import structlog

from npmctl.client import ProxyManagerClient

STUB_BASE_URL = "http://npm.test/api"
STUB_TOKEN = "stub-token"


# =============================================================================
# Stub Nginx Proxy Manager
# =============================================================================


def make_host(host_id: int, *domains: str, **overrides: Any) -> dict[str, Any]:
    """Build a proxy host record shaped like the API returns it."""
    record = {
        "id": host_id,
        "created_on": "2024-01-01 00:00:00",
        "modified_on": "2024-01-02 00:00:00",
        "owner_user_id": 1,
        "domain_names": list(domains) or [f"host{host_id}.example.com"],
        "forward_scheme": "http",
        "forward_host": "10.0.0.1",
        "forward_port": 8080,
        "access_list_id": 0,
        "certificate_id": 0,
        "ssl_forced": False,
        "caching_enabled": False,
        "block_exploits": True,
        "advanced_config": "",
        "meta": {"letsencrypt_agree": False},
        "allow_websocket_upgrade": False,
        "http2_support": False,
        "enabled": True,
    }
    record.update(overrides)
    return record


class StubProxyManager:
    """In-memory stand-in for the Nginx Proxy Manager API."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.hosts: list[dict[str, Any]] = [
            make_host(1, "alpha.example.com"),
            make_host(2, "beta.example.com", "www.beta.example.com", ssl_forced=True),
        ]
        self.token_status = 200
        self.token_body: Any = {"token": STUB_TOKEN, "expires": "2030-01-01T00:00:00.000Z"}
        self.list_status = 200
        self.list_body: Any = None
        self.create_status = 201
        self.create_body: Any = None
        self.next_id = 42
        self.delete_status = 204
        self.raise_error: Exception | None = None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error

        path = request.url.path
        if request.method == "POST" and path == "/api/tokens":
            return self._respond(self.token_status, self.token_body)
        if request.method == "GET" and path == "/api/nginx/proxy-hosts":
            body = self.list_body if self.list_body is not None else self.hosts
            return self._respond(self.list_status, body)
        if request.method == "POST" and path == "/api/nginx/proxy-hosts":
            if self.create_body is not None:
                return self._respond(self.create_status, self.create_body)
            created = {**json.loads(request.content), "id": self.next_id}
            created.setdefault("created_on", "2024-03-01 12:00:00")
            created.setdefault("modified_on", "2024-03-01 12:00:00")
            return self._respond(self.create_status, created)
        if request.method == "DELETE" and path.startswith("/api/nginx/proxy-hosts/"):
            if self.delete_status == 204:
                return httpx.Response(204)
            return self._respond(self.delete_status, {"error": {"code": self.delete_status, "message": "Not Found"}})
        return httpx.Response(404, json={"error": {"message": "no route"}})

    @staticmethod
    def _respond(status: int, body: Any) -> httpx.Response:
        if isinstance(body, (str, bytes)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        """Requests matching method and path (path relative to the API base)."""
        full = "/api" + path
        return [r for r in self.requests if r.method == method and r.url.path == full]

    def resource_calls(self) -> list[httpx.Request]:
        """Requests other than the token exchange."""
        return [r for r in self.requests if r.url.path != "/api/tokens"]


@pytest.fixture
def stub() -> StubProxyManager:
    """Fresh stub server per test."""
    return StubProxyManager()


@pytest.fixture
def stub_client(stub: StubProxyManager) -> ProxyManagerClient:
    """API client wired to the stub server."""
    return ProxyManagerClient(STUB_BASE_URL, timeout=5.0, transport=stub.transport)


# =============================================================================
# Environment and logging isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_npm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's NPM_* variables out of tests."""
    for name in ("NPM_API_URL", "NPM_USERNAME", "NPM_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging so streams don't leak between tests."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.WARNING)
    structlog.reset_defaults()
