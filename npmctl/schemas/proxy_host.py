"""
Proxy Host Schemas.

Pydantic schemas for the Nginx Proxy Manager token exchange and
proxy host request/response bodies.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ForwardScheme = Literal["http", "https"]


class TokenRequest(BaseModel):
    """Body of POST /tokens."""

    identity: str
    password: str = Field(repr=False)


class TokenResponse(BaseModel):
    """Body returned by POST /tokens."""

    token: str = Field(min_length=1, repr=False)
    expires: str | None = None


class ProxyHostCreate(BaseModel):
    """Schema for creating a new proxy host."""

    domain_names: list[str] = Field(
        ...,
        min_length=1,
        description="Public domain names routed to the forward target",
        examples=[["example.com"]],
    )
    forward_scheme: ForwardScheme = Field(default="http", description="Backend scheme")
    forward_host: str = Field(..., min_length=1, description="Backend host", examples=["192.168.1.100"])
    forward_port: int = Field(..., gt=0, description="Backend port", examples=[8080])
    access_list_id: int | None = Field(default=None, description="Access list to attach")
    certificate_id: int | None = Field(default=None, description="Certificate to attach")
    ssl_forced: bool = False
    caching_enabled: bool = False
    block_exploits: bool = False
    advanced_config: str = ""
    enabled: bool = True

    @property
    def forward_target(self) -> str:
        return f"{self.forward_scheme}://{self.forward_host}:{self.forward_port}"

    def to_request_body(self) -> dict:
        """Serialize for the wire, leaving out unset references."""
        return self.model_dump(exclude_none=True)


class ProxyHost(BaseModel):
    """Schema for a proxy host as returned by the API."""

    id: int = Field(description="Server-assigned identifier")
    domain_names: list[str] = Field(default_factory=list)
    forward_scheme: ForwardScheme = "http"
    forward_host: str = ""
    forward_port: int = 0
    access_list_id: int | None = None
    certificate_id: int | None = None
    ssl_forced: bool = False
    caching_enabled: bool = False
    block_exploits: bool = False
    advanced_config: str = ""
    enabled: bool = False
    created_on: str = ""
    modified_on: str = ""

    model_config = ConfigDict(extra="ignore")

    @property
    def forward_target(self) -> str:
        return f"{self.forward_scheme}://{self.forward_host}:{self.forward_port}"
