"""Asynchronous store API client.

This module provides :class:`AsyncClient`, the asyncio counterpart of
:class:`~wcapi.client.sync_client.Client`, backed by
:class:`httpx.AsyncClient`.  Validation and signing are shared through
:class:`~wcapi.client.builder.RequestBuilder`; only dispatch and body
handling are awaited.

See Also:
    :class:`~wcapi.client.sync_client.Client` for the blocking
    implementation and the full pipeline description.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from wcapi.auth.sources import Clock, NonceSource
from wcapi.client.builder import RequestBuilder
from wcapi.client.response import AsyncResponseBody, ainterpret_response
from wcapi.models import ClientOptions
from wcapi.params import ParamsInput

logger = logging.getLogger(__name__)


class AsyncClient:
    """Non-blocking client for one store.

    Safe to share between tasks on one event loop.  Arguments match
    :class:`~wcapi.client.sync_client.Client`, except that *http_client* is
    an :class:`httpx.AsyncClient`.

    Example::

        async with AsyncClient("https://shop.example", "ck_...", "cs_...") as client:
            async with await client.get("orders") as body:
                orders = await body.json()
    """

    def __init__(
        self,
        store_url: str,
        consumer_key: str,
        consumer_secret: str,
        options: Optional[ClientOptions] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
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
            http_client = httpx.AsyncClient(
                timeout=self._options.timeout,
                verify=self._options.verify_ssl,
                follow_redirects=True,
            )
        self._http = http_client

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP executor if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    @property
    def builder(self) -> RequestBuilder:
        return self._builder

    @property
    def root_url(self) -> str:
        return self._builder.endpoint.root_url

    def signed_url(self, method: str, endpoint: str, params: ParamsInput = None) -> str:
        """Return the authenticated URL for a request without sending it."""
        return self._builder.signed_url(method, endpoint, params)

    async def request(
        self,
        method: str,
        endpoint: str,
        params: ParamsInput = None,
        data: Any = None,
    ) -> AsyncResponseBody:
        """Sign and send one request.

        See :meth:`wcapi.client.sync_client.Client.request` for arguments
        and raised errors.
        """
        prepared = self._builder.build(method, endpoint, params, data)
        request = self._http.build_request(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            content=prepared.content,
        )
        logger.debug("%s %s", prepared.method, prepared.path)
        response = await self._http.send(request, stream=True)
        logger.debug("%s %s -> %s", prepared.method, prepared.path, response.status_code)
        return await ainterpret_response(response)

    async def get(self, endpoint: str, params: ParamsInput = None) -> AsyncResponseBody:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any) -> AsyncResponseBody:
        return await self.request("POST", endpoint, data=data)

    async def put(self, endpoint: str, data: Any) -> AsyncResponseBody:
        return await self.request("PUT", endpoint, data=data)

    async def delete(self, endpoint: str, params: ParamsInput = None) -> AsyncResponseBody:
        return await self.request("DELETE", endpoint, params=params)

    async def options(self, endpoint: str) -> AsyncResponseBody:
        return await self.request("OPTIONS", endpoint)
