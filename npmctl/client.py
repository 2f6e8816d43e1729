"""
HTTP Client for the Nginx Proxy Manager API.

Provides an async client that exchanges credentials for a bearer token
and then manages proxy hosts over the authenticated channel. Every
operation is a single round trip; nothing is retried or cached.
"""

import asyncio
from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from npmctl.core.exceptions import APIError, AuthenticationError, TransportError
from npmctl.core.logging import get_logger, log_with_source
from npmctl.schemas.proxy_host import ProxyHost, ProxyHostCreate, TokenRequest, TokenResponse

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

PROXY_HOSTS_PATH = "/nginx/proxy-hosts"

_host_list = TypeAdapter(list[ProxyHost])


def _describe(e: SchemaError) -> str:
    """Summarize a decode failure by its count and first offending field."""
    first = e.errors()[0]
    loc = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{e.error_count()} validation error(s), first at {loc}: {first['msg']}"


class ProxyManagerClient:
    """
    HTTP client for the Nginx Proxy Manager API.

    Features:
    - Token exchange against POST /tokens
    - Bearer + JSON headers on every resource call
    - Structured logging of requests/responses (never of secrets)
    - Typed errors carrying status code and body

    Usage:
        async with ProxyManagerClient("http://npm:81/api") as client:
            await client.authenticate("admin@example.com", "changeme")
            hosts = await client.list_hosts()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API base URL including its path prefix, e.g. http://host:81/api
            timeout: Upper bound in seconds on each whole request, connect to
                last byte.
            transport: Optional httpx transport, used to plug in a stub server.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and forget the token."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
        self._token = None

    async def __aenter__(self) -> "ProxyManagerClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send one request and return the fully read response.

        Raises:
            TransportError: If no response was received within the timeout
        """
        log_with_source(logger, "cli", "debug", "API request", method=method, path=path)

        try:
            client = self._get_client()
            response = await asyncio.wait_for(client.request(method, path, **kwargs), self.timeout)
        except asyncio.TimeoutError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "API request timed out",
                method=method,
                path=path,
                timeout=self.timeout,
            )
            raise TransportError(f"{method} {path}: request exceeded {self.timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise TransportError(f"{method} {path}: {type(e).__name__}: {e}") from e

        log_with_source(
            logger,
            "cli",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def _authed(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request carrying the bearer token and JSON content type."""
        if self._token is None:
            raise AuthenticationError("not authenticated")

        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        return await self._send(method, path, headers=headers, **kwargs)

    async def authenticate(self, identity: str, secret: str) -> str:
        """
        Exchange credentials for a bearer token and keep it for later calls.

        Args:
            identity: Login (usually an email address)
            secret: Password

        Returns:
            The token string

        Raises:
            AuthenticationError: Non-200 status or undecodable token body
            TransportError: Connection or timeout failure
        """
        body = TokenRequest(identity=identity, password=secret).model_dump()
        response = await self._send("POST", "/tokens", json=body)

        if response.status_code != httpx.codes.OK:
            raise AuthenticationError(
                f"token request returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            token = TokenResponse.model_validate_json(response.content).token
        except SchemaError as e:
            raise AuthenticationError(
                f"failed to decode token response: {_describe(e)}",
                status_code=response.status_code,
            ) from e

        if not token.isascii():
            raise AuthenticationError(
                "token is not a valid header value",
                status_code=response.status_code,
            )

        self._token = token
        log_with_source(logger, "cli", "info", "Authenticated", identity=identity)
        return token

    async def list_hosts(self) -> list[ProxyHost]:
        """
        List all proxy hosts in the order the server returns them.

        Raises:
            APIError: Non-200 status or undecodable body
        """
        response = await self._authed("GET", PROXY_HOSTS_PATH)

        if response.status_code != httpx.codes.OK:
            raise APIError(
                f"unexpected status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return _host_list.validate_json(response.content)
        except SchemaError as e:
            raise APIError(
                f"failed to decode proxy hosts: {_describe(e)}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def create_host(self, host: ProxyHostCreate) -> ProxyHost:
        """
        Create a proxy host.

        Args:
            host: Fields for the new host. The server assigns the id.

        Returns:
            The created record, including its id

        Raises:
            APIError: Non-201 status (with raw body) or undecodable body
        """
        response = await self._authed("POST", PROXY_HOSTS_PATH, json=host.to_request_body())

        if response.status_code != httpx.codes.CREATED:
            raise APIError(
                f"unexpected status {response.status_code}, body: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            created = ProxyHost.model_validate_json(response.content)
        except SchemaError as e:
            raise APIError(
                f"failed to decode created proxy host: {_describe(e)}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        log_with_source(logger, "cli", "info", "Proxy host created", host_id=created.id)
        return created

    async def delete_host(self, host_id: int) -> None:
        """
        Delete a proxy host by id. 200 and 204 both count as success.

        Raises:
            APIError: Any other status
        """
        response = await self._authed("DELETE", f"{PROXY_HOSTS_PATH}/{host_id}")

        if response.status_code not in (httpx.codes.OK, httpx.codes.NO_CONTENT):
            raise APIError(
                f"unexpected status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        log_with_source(logger, "cli", "info", "Proxy host deleted", host_id=host_id)
