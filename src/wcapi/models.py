"""Canonical Pydantic models shared across all wcapi modules.

The models fall into two groups:

**Client models** -- immutable values fixed when a client is constructed:
    :class:`Credentials`, :class:`StoreEndpoint`, :class:`ClientOptions`,
    plus the :class:`AuthMode` and :class:`HTTPMethod` enumerations.

**Configuration models** -- serialised as JSON in the user's config directory
and consumed by the command line:
    :class:`GlobalConfig` and :class:`Profile`.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from wcapi import USER_AGENT

LEGACY_API_PREFIX = "/wc-api/"
"""Path prefix of the legacy store API, used unless ``ClientOptions.api`` is set."""

DEFAULT_API_PREFIX = "/wp-json/wc/"
"""Default alternate prefix selected by ``ClientOptions.api``."""

DEFAULT_VERSION = "v3"


class AuthMode(str, enum.Enum):
    """How a request is authenticated.

    Chosen per request from the resolved URL's scheme and never configured
    on its own: query secrets are only sent in the clear over ``https``.
    """

    BASIC = "basic"
    OAUTH1 = "oauth1"


class HTTPMethod(str, enum.Enum):
    """HTTP methods the store API accepts."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

    @property
    def has_body(self) -> bool:
        """Whether the method carries a JSON request body."""
        return self in (HTTPMethod.POST, HTTPMethod.PUT)


# --- Client models ---


class Credentials(BaseModel):
    """Consumer key / secret pair identifying the API caller.

    The secret is held as a :class:`~pydantic.SecretStr` so it never shows
    up in ``repr()`` output, tracebacks, or log lines.
    """

    model_config = ConfigDict(frozen=True)

    consumer_key: str
    consumer_secret: SecretStr

    @property
    def secret(self) -> str:
        """The plain consumer secret, for signing only."""
        return self.consumer_secret.get_secret_value()


class StoreEndpoint(BaseModel):
    """Store base URL combined with the API prefix and version.

    The combination happens once; :attr:`root_url` always ends with ``/`` so
    endpoint segments concatenate cleanly.

    Example::

        >>> StoreEndpoint(base_url="https://shop.example").root_url
        'https://shop.example/wc-api/v3/'
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    api_prefix: str = LEGACY_API_PREFIX
    version: str = DEFAULT_VERSION

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(f"store URL must be an absolute http(s) URL, got {value!r}")
        return value

    @property
    def scheme(self) -> str:
        return urlsplit(self.base_url).scheme

    @property
    def base_path(self) -> str:
        """URL path of the API root, e.g. ``/shop/wc-api/v3/``."""
        path = urlsplit(self.base_url).path.rstrip("/") + "/"
        for segment in (self.api_prefix, self.version):
            segment = segment.strip("/")
            if segment:
                path += segment + "/"
        return path

    @property
    def root_url(self) -> str:
        """Absolute URL of the API root, ending with ``/``."""
        parts = urlsplit(self.base_url)
        return urlunsplit((parts.scheme, parts.netloc, self.base_path, "", ""))

    def url_for(self, endpoint: str) -> str:
        """Return the absolute URL of *endpoint* below the API root."""
        return self.root_url + endpoint.lstrip("/")


class ClientOptions(BaseModel):
    """Options recognised by :class:`~wcapi.client.Client`.

    Only ``version``, ``api``/``api_prefix`` and ``oauth_timestamp``
    influence signing. ``verify_ssl``, ``timeout`` and ``user_agent`` are
    handed to the HTTP executor.
    """

    version: str = Field(default=DEFAULT_VERSION, description="API version segment")
    api: bool = Field(
        default=False, description="Use api_prefix instead of the legacy /wc-api/ prefix"
    )
    api_prefix: str = Field(default=DEFAULT_API_PREFIX, description="Prefix used when api is set")
    verify_ssl: bool = Field(
        default=True, description="Verify TLS certificates (disabling is insecure)"
    )
    oauth_timestamp: Optional[datetime] = Field(
        default=None, description="Fixed oauth_timestamp for deterministic signing"
    )
    timeout: float = Field(default=30.0, description="HTTP executor timeout in seconds")
    user_agent: str = Field(default=USER_AGENT)

    def endpoint_for(self, base_url: str) -> StoreEndpoint:
        """Build the :class:`StoreEndpoint` these options describe for *base_url*."""
        return StoreEndpoint(
            base_url=base_url,
            api_prefix=self.api_prefix if self.api else LEGACY_API_PREFIX,
            version=self.version or DEFAULT_VERSION,
        )


# --- Configuration models ---


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/wcapi/config.json``."""

    default_profile: Optional[str] = None
    auto_select_single_profile: bool = True


class Profile(BaseModel):
    """A store connection stored as JSON under the ``profiles/`` config directory.

    Credentials are not stored directly; ``consumer_key_source`` and
    ``consumer_secret_source`` are resolved by
    :func:`~wcapi.config.resolve_credential` when a client is built.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    store_url: str = Field(description="Store base URL, e.g. https://shop.example")
    consumer_key_source: str = Field(
        default="env:WC_CONSUMER_KEY",
        description="Credential source: env:VAR, file:/path, prompt, value:LITERAL",
    )
    consumer_secret_source: str = Field(
        default="env:WC_CONSUMER_SECRET",
        description="Credential source: env:VAR, file:/path, prompt, value:LITERAL",
    )
    version: str = DEFAULT_VERSION
    api: bool = False
    api_prefix: str = DEFAULT_API_PREFIX
    verify_ssl: bool = True
    timeout: float = 30.0

    def client_options(self) -> ClientOptions:
        """Return the :class:`ClientOptions` this profile describes."""
        return ClientOptions(
            version=self.version,
            api=self.api,
            api_prefix=self.api_prefix,
            verify_ssl=self.verify_ssl,
            timeout=self.timeout,
        )
