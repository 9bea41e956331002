"""Request construction shared by the blocking and asyncio clients.

:class:`RequestBuilder` owns everything that happens before bytes hit the
network:

1. validate the HTTP method (fails fast, no I/O);
2. resolve ``root_url + endpoint``;
3. ask the :class:`~wcapi.auth.Signer` for the auth query string and append
   it as the request's *only* query string;
4. set ``User-Agent``/``Accept`` on every request and
   ``Content-Type: application/json`` on writes;
5. encode the request body.

The result is a :class:`PreparedRequest` that either client turns into an
:class:`httpx.Request` with its executor's ``build_request``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import ValidationError

from wcapi import USER_AGENT
from wcapi.auth import Signer, create_default_signer, fixed_clock
from wcapi.auth.sources import Clock, NonceSource
from wcapi.exceptions import ConfigError, InvalidUsageError
from wcapi.models import ClientOptions, Credentials, HTTPMethod, StoreEndpoint
from wcapi.params import ParamsInput

JSON_CONTENT_TYPE = "application/json"


@dataclass
class PreparedRequest:
    """A fully signed request, ready for the HTTP executor."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None

    @property
    def path(self) -> str:
        """URL path without the query, safe to log."""
        return urlsplit(self.url).path


def validate_method(method: str) -> HTTPMethod:
    """Return the :class:`~wcapi.models.HTTPMethod` for *method*.

    Raises:
        InvalidUsageError: If *method* is not GET, POST, PUT, DELETE or OPTIONS.
    """
    try:
        return HTTPMethod(method)
    except ValueError:
        raise InvalidUsageError(f"Method is not recognised: {method}") from None


def encode_body(data: Any) -> bytes:
    """Encode a request body: bytes pass through, str is UTF-8, anything else is JSON."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    return json.dumps(data).encode("utf-8")


class RequestBuilder:
    """Validates, signs and assembles requests against one store.

    Holds only immutable state (the endpoint, the signer, the user agent),
    so one builder may serve concurrent requests.

    Args:
        endpoint: The store's API root.
        signer: Produces the auth query string for each request.
        user_agent: Value of the ``User-Agent`` header.
    """

    def __init__(
        self,
        endpoint: StoreEndpoint,
        signer: Signer,
        user_agent: str = USER_AGENT,
    ) -> None:
        self._endpoint = endpoint
        self._signer = signer
        self._user_agent = user_agent

    @classmethod
    def from_options(
        cls,
        store_url: str,
        consumer_key: str,
        consumer_secret: str,
        options: Optional[ClientOptions] = None,
        clock: Optional[Clock] = None,
        nonce_source: Optional[NonceSource] = None,
    ) -> RequestBuilder:
        """Build a builder from client construction parameters.

        A fixed ``options.oauth_timestamp`` becomes the signing clock unless
        an explicit *clock* is supplied.

        Raises:
            ConfigError: If *store_url* is not an absolute http(s) URL.
        """
        options = options or ClientOptions()
        try:
            endpoint = options.endpoint_for(store_url)
        except ValidationError as exc:
            reason = exc.errors()[0].get("msg", str(exc))
            raise ConfigError(f"Invalid store URL {store_url!r}: {reason}") from exc

        if clock is None and options.oauth_timestamp is not None:
            clock = fixed_clock(options.oauth_timestamp)

        credentials = Credentials(consumer_key=consumer_key, consumer_secret=consumer_secret)
        signer = create_default_signer(credentials, clock=clock, nonce_source=nonce_source)
        return cls(endpoint, signer, user_agent=options.user_agent)

    @property
    def endpoint(self) -> StoreEndpoint:
        return self._endpoint

    @property
    def signer(self) -> Signer:
        return self._signer

    def headers(self, method: HTTPMethod) -> dict[str, str]:
        """Return the headers sent with *method*."""
        headers = {"User-Agent": self._user_agent, "Accept": JSON_CONTENT_TYPE}
        if method.has_body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers

    def signed_url(self, method: str, endpoint: str, params: ParamsInput = None) -> str:
        """Return the absolute, authenticated URL for a request.

        Raises:
            InvalidUsageError: For an unsupported method.
            EntropyError: If an OAuth nonce cannot be generated.
        """
        verb = validate_method(method)
        url = self._endpoint.url_for(endpoint)
        return f"{url}?{self._signer.sign(verb.value, url, params)}"

    def build(
        self,
        method: str,
        endpoint: str,
        params: ParamsInput = None,
        data: Any = None,
    ) -> PreparedRequest:
        """Validate, sign and assemble one request.

        Args:
            method: GET, POST, PUT, DELETE or OPTIONS (uppercase).
            endpoint: Path below the API root, e.g. ``"orders/42"``.
            params: Query parameters, folded into the signed query string.
            data: Request body; required for POST and PUT, ignored otherwise.

        Raises:
            InvalidUsageError: For an unsupported method, or a POST/PUT
                without a body.
            EntropyError: If an OAuth nonce cannot be generated.
        """
        verb = validate_method(method)
        if verb.has_body and data is None:
            raise InvalidUsageError(f"{verb.value} requests require a body")

        return PreparedRequest(
            method=verb.value,
            url=self.signed_url(verb.value, endpoint, params),
            headers=self.headers(verb),
            content=encode_body(data) if verb.has_body else None,
        )
