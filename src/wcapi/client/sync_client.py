"""Synchronous store API client.

This module provides :class:`Client`, the blocking client backed by
:class:`httpx.Client`.  Each call runs one linear pipeline:

- **validate** -- unsupported methods fail before any I/O;
- **sign** -- Basic credentials over ``https``, an OAuth1 signature otherwise;
- **dispatch** -- a single attempt through the HTTP executor, no retries;
- **interpret** -- 200/201 yield a caller-owned
  :class:`~wcapi.client.response.ResponseBody`, any other status raises a
  :class:`~wcapi.exceptions.RequestFailedError` subclass.

Transport failures (:class:`httpx.TransportError`) propagate unchanged.

See Also:
    :class:`~wcapi.client.async_client.AsyncClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from wcapi.auth.sources import Clock, NonceSource
from wcapi.client.builder import RequestBuilder
from wcapi.client.response import ResponseBody, interpret_response
from wcapi.models import ClientOptions
from wcapi.params import ParamsInput

logger = logging.getLogger(__name__)


class Client:
    """Blocking client for one store.

    Safe to share between threads: credentials, endpoint and signer are
    immutable, and every request builds its own parameter list.  The
    underlying :class:`httpx.Client` connection pool is the only shared
    resource.

    Args:
        store_url: Store base URL, e.g. ``"https://shop.example"``.
        consumer_key: API consumer key.
        consumer_secret: API consumer secret.
        options: Version, prefix, TLS and timestamp options.
        http_client: Executor to use instead of a client-owned
            :class:`httpx.Client`.  A supplied executor is not closed by
            :meth:`close`.
        clock: Signing clock override (Unix seconds).
        nonce_source: OAuth nonce source override.

    Raises:
        ConfigError: If *store_url* is not an absolute http(s) URL.

    Example::

        with Client("https://shop.example", "ck_...", "cs_...") as client:
            with client.get("orders", {"status": "processing"}) as body:
                orders = body.json()
    """

    def __init__(
        self,
        store_url: str,
        consumer_key: str,
        consumer_secret: str,
        options: Optional[ClientOptions] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        clock: Optional[Clock] = None,
        nonce_source: Optional[NonceSource] = None,
    ) -> None:
        self._options = options or ClientOptions()
        self._builder = RequestBuilder.from_options(
            store_url,
            consumer_key,
            consumer_secret,
            self._options,
            clock=clock,
            nonce_source=nonce_source,
        )
        self._owns_http = http_client is None
        if http_client is None:
            if not self._options.verify_ssl:
                logger.warning(
                    "TLS certificate verification is disabled for %s",
                    self._builder.endpoint.root_url,
                )
            http_client = httpx.Client(
                timeout=self._options.timeout,
                verify=self._options.verify_ssl,
                follow_redirects=True,
            )
        self._http = http_client

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP executor if this client created it."""
        if self._owns_http:
            self._http.close()

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    @property
    def builder(self) -> RequestBuilder:
        return self._builder

    @property
    def root_url(self) -> str:
        """The store's API root, ending with ``/``."""
        return self._builder.endpoint.root_url

    def signed_url(self, method: str, endpoint: str, params: ParamsInput = None) -> str:
        """Return the authenticated URL for a request without sending it."""
        return self._builder.signed_url(method, endpoint, params)

    def request(
        self,
        method: str,
        endpoint: str,
        params: ParamsInput = None,
        data: Any = None,
    ) -> ResponseBody:
        """Sign and send one request.

        Args:
            method: GET, POST, PUT, DELETE or OPTIONS.
            endpoint: Path below the API root, e.g. ``"products/12"``.
            params: Query parameters (mapping or ``(key, value)`` pairs).
            data: Body for POST / PUT: bytes, str, or a JSON-serialisable value.

        Returns:
            A :class:`~wcapi.client.response.ResponseBody` the caller must close.

        Raises:
            InvalidUsageError: Unsupported method or missing body; no I/O happened.
            EntropyError: No randomness for the OAuth nonce.
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On 5xx.
            RequestFailedError: On any other status except 200 / 201.
            httpx.TransportError: On DNS, connection, TLS or timeout failures.
        """
        prepared = self._builder.build(method, endpoint, params, data)
        request = self._http.build_request(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            content=prepared.content,
        )
        logger.debug("%s %s", prepared.method, prepared.path)
        response = self._http.send(request, stream=True)
        logger.debug("%s %s -> %s", prepared.method, prepared.path, response.status_code)
        return interpret_response(response)

    def get(self, endpoint: str, params: ParamsInput = None) -> ResponseBody:
        """Send a GET request with query *params*."""
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Any) -> ResponseBody:
        """Send a POST request with a JSON body."""
        return self.request("POST", endpoint, data=data)

    def put(self, endpoint: str, data: Any) -> ResponseBody:
        """Send a PUT request with a JSON body."""
        return self.request("PUT", endpoint, data=data)

    def delete(self, endpoint: str, params: ParamsInput = None) -> ResponseBody:
        """Send a DELETE request, e.g. ``delete("products/7", {"force": "true"})``."""
        return self.request("DELETE", endpoint, params=params)

    def options(self, endpoint: str) -> ResponseBody:
        """Send an OPTIONS request."""
        return self.request("OPTIONS", endpoint)
