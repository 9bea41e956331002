"""Response interpretation -- maps a streamed :class:`httpx.Response` to a body handle or an error.

Only ``200 OK`` and ``201 Created`` count as success.  A successful response
is handed to the caller *unread*, wrapped in :class:`ResponseBody` (or
:class:`AsyncResponseBody`); the caller owns it and must close it, ideally
with a ``with`` block.

Every other status is turned into a
:class:`~wcapi.exceptions.RequestFailedError` subclass.  The body is read up
to :data:`ERROR_BODY_LIMIT` bytes, attached to the error, and the response
is closed before raising, so error paths never leak a connection.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Iterator
from typing import Any, Optional

import httpx

from wcapi.exceptions import AuthError, NotFoundError, RequestFailedError, ServerError

SUCCESS_STATUSES = frozenset({200, 201})

ERROR_BODY_LIMIT = 64 * 1024
"""Maximum number of error-body bytes kept on a :class:`RequestFailedError`."""


class ResponseBody:
    """Caller-owned handle to the body of a successful response.

    Args:
        response: A streamed response whose body has not been read yet.

    Example::

        with client.get("products") as body:
            products = body.json()
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def response(self) -> httpx.Response:
        """The underlying :class:`httpx.Response`."""
        return self._response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    def read(self) -> bytes:
        """Read and return the complete body."""
        return self._response.read()

    def text(self) -> str:
        self._response.read()
        return self._response.text

    def json(self) -> Any:
        self._response.read()
        return self._response.json()

    def iter_bytes(self, chunk_size: Optional[int] = None) -> Iterator[bytes]:
        """Stream the body in chunks without buffering it all."""
        return self._response.iter_bytes(chunk_size)

    def close(self) -> None:
        """Release the connection back to the pool."""
        self._response.close()

    def __enter__(self) -> ResponseBody:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncResponseBody:
    """Caller-owned handle to the body of a successful response (asyncio flavour).

    Args:
        response: A streamed response whose body has not been read yet.

    Example::

        async with await client.get("products") as body:
            products = await body.json()
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def response(self) -> httpx.Response:
        return self._response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    async def read(self) -> bytes:
        return await self._response.aread()

    async def text(self) -> str:
        await self._response.aread()
        return self._response.text

    async def json(self) -> Any:
        await self._response.aread()
        return self._response.json()

    def iter_bytes(self, chunk_size: Optional[int] = None) -> AsyncIterator[bytes]:
        return self._response.aiter_bytes(chunk_size)

    async def close(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> AsyncResponseBody:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def _error_detail(body: bytes) -> str:
    """Pull a short human-readable message out of an error body."""
    if not body:
        return ""
    text = body.decode("utf-8", errors="replace")
    try:
        detail = json.loads(text)
    except ValueError:
        return text[:200].strip()
    if isinstance(detail, dict):
        errors = detail.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            # legacy API: {"errors": [{"code": ..., "message": ...}]}
            return str(errors[0].get("message") or "")
        return str(detail.get("message") or detail.get("error") or "")
    return text[:200].strip()


def build_error(response: httpx.Response, body: bytes) -> RequestFailedError:
    """Return the typed error for a non-success *response* with the given *body* bytes."""
    status = response.status_code
    reason = response.reason_phrase or ""
    message = f"Request failed: {status} {reason}".rstrip()
    detail = _error_detail(body)
    if detail:
        message = f"{message}: {detail}"

    exc_type: type[RequestFailedError] = RequestFailedError
    if status in (401, 403):
        exc_type = AuthError
    elif status == 404:
        exc_type = NotFoundError
    elif status >= 500:
        exc_type = ServerError
    return exc_type(message, status_code=status, reason=reason, body=body)


def read_capped(response: httpx.Response, limit: int = ERROR_BODY_LIMIT) -> bytes:
    """Read at most *limit* bytes of a streamed *response* body."""
    chunks: list[bytes] = []
    size = 0
    for chunk in response.iter_bytes():
        chunks.append(chunk)
        size += len(chunk)
        if size >= limit:
            break
    return b"".join(chunks)[:limit]


async def aread_capped(response: httpx.Response, limit: int = ERROR_BODY_LIMIT) -> bytes:
    chunks: list[bytes] = []
    size = 0
    async for chunk in response.aiter_bytes():
        chunks.append(chunk)
        size += len(chunk)
        if size >= limit:
            break
    return b"".join(chunks)[:limit]


def interpret_response(response: httpx.Response) -> ResponseBody:
    """Hand a 200/201 *response* to the caller or raise for any other status.

    Raises:
        AuthError: On 401 / 403.
        NotFoundError: On 404.
        ServerError: On 5xx.
        RequestFailedError: On any other status.
    """
    if response.status_code in SUCCESS_STATUSES:
        return ResponseBody(response)
    try:
        body = read_capped(response)
    finally:
        response.close()
    raise build_error(response, body)


async def ainterpret_response(response: httpx.Response) -> AsyncResponseBody:
    """Asyncio counterpart of :func:`interpret_response`."""
    if response.status_code in SUCCESS_STATUSES:
        return AsyncResponseBody(response)
    try:
        body = await aread_capped(response)
    finally:
        await response.aclose()
    raise build_error(response, body)
