"""HTTP client module for wcapi.

Provides synchronous and asynchronous clients that wrap :mod:`httpx`
with per-request query authentication and strict status interpretation.

Classes:
    :class:`Client` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.
    :class:`RequestBuilder` -- validation, URL resolution and signing shared
    by both clients.

Both clients can be used as context managers and accept the same
construction parameters: a store URL, a consumer key and secret, and an
optional :class:`~wcapi.models.ClientOptions`.

Example::

    from wcapi.client import Client

    with Client("https://shop.example", "ck_...", "cs_...") as client:
        with client.get("products") as body:
            print(body.json())
"""

from wcapi.client.async_client import AsyncClient
from wcapi.client.builder import PreparedRequest, RequestBuilder
from wcapi.client.response import AsyncResponseBody, ResponseBody
from wcapi.client.sync_client import Client

__all__ = [
    "AsyncClient",
    "AsyncResponseBody",
    "Client",
    "PreparedRequest",
    "RequestBuilder",
    "ResponseBody",
]
