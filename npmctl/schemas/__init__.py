"""Wire schemas for the Nginx Proxy Manager API."""

from npmctl.schemas.proxy_host import (
    ProxyHost,
    ProxyHostCreate,
    TokenRequest,
    TokenResponse,
)

__all__ = ["ProxyHost", "ProxyHostCreate", "TokenRequest", "TokenResponse"]
