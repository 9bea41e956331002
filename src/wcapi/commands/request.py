"""Request commands -- ``get``, ``post``, ``put``, ``delete``, ``options`` and ``sign``.

Each command resolves the active profile, builds a
:class:`~wcapi.client.Client`, sends exactly one request and prints the
response body to stdout (status line on stderr).  ``sign`` stops after
signing and prints the authenticated URL instead.

Query parameters are passed as repeated ``-q key=value`` options, so
array-style parameters may repeat a key.  Bodies are JSON, given inline,
as ``@path/to/file.json``, or as ``-`` for stdin.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import typer

from wcapi.auth import Signer
from wcapi.client import Client, ResponseBody
from wcapi.config import resolve_credential, resolve_profile
from wcapi.exceptions import ConnectionError_, InvalidUsageError, WcapiError
from wcapi.models import AuthMode
from wcapi.output import error, format_response, info, print_data, warning

QUERY_HELP = "Query parameter as key=value (repeatable)."
DATA_HELP = "JSON body, @file.json, or - for stdin."


def build_client(profile_name: Optional[str] = None) -> Client:
    """Build a :class:`~wcapi.client.Client` for the active profile.

    Raises:
        ConfigError: If the profile or its credentials cannot be resolved,
            or the store URL is invalid.
    """
    profile = resolve_profile(profile_name)
    return Client(
        profile.store_url,
        resolve_credential(profile.consumer_key_source),
        resolve_credential(profile.consumer_secret_source),
        profile.client_options(),
    )


def parse_query(values: Optional[list[str]]) -> list[tuple[str, str]]:
    """Turn ``["k=v", ...]`` into ordered pairs.

    Raises:
        InvalidUsageError: If an item has no ``=``.
    """
    pairs: list[tuple[str, str]] = []
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise InvalidUsageError(f"Query parameter must look like key=value, got {item!r}")
        pairs.append((key, value))
    return pairs


def parse_data(value: Optional[str]) -> Any:
    """Load a JSON body from inline text, ``@file`` or ``-`` (stdin).

    Raises:
        InvalidUsageError: If the body is missing, unreadable, or not JSON.
    """
    if value is None:
        raise InvalidUsageError("A JSON body is required (--data)")
    if value == "-":
        text = sys.stdin.read()
    elif value.startswith("@"):
        try:
            text = Path(value[1:]).expanduser().read_text(encoding="utf-8")
        except OSError as exc:
            raise InvalidUsageError(f"Cannot read body file {value[1:]}: {exc}") from exc
    else:
        text = value
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"Body is not valid JSON: {exc}") from exc


def _print_body(body: ResponseBody) -> None:
    with body:
        info(f"HTTP {body.status_code} {body.response.reason_phrase or ''}".rstrip())
        raw = body.read()
        if not raw:
            return
        try:
            format_response(json.loads(raw))
        except ValueError:
            format_response(raw.decode("utf-8", errors="replace"))


def _run(
    ctx: typer.Context,
    method: str,
    endpoint: str,
    query: Optional[list[str]] = None,
    data: Optional[str] = None,
    needs_body: bool = False,
) -> None:
    """Send one request and print the result; map errors to exit codes."""
    try:
        params = parse_query(query)
        body = parse_data(data) if needs_body else None
        with build_client(_profile_name(ctx)) as client:
            try:
                _print_body(client.request(method, endpoint, params=params, data=body))
            except httpx.TransportError as exc:
                # raised on send or while streaming the body
                raise ConnectionError_(f"{method} {endpoint} failed: {exc}") from exc
    except WcapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _profile_name(ctx: typer.Context) -> Optional[str]:
    obj = ctx.find_root().obj or {}
    return obj.get("profile")


def get_command(
    ctx: typer.Context,
    endpoint: str = typer.Argument(help="Endpoint below the API root, e.g. products."),
    query: Optional[list[str]] = typer.Option(None, "--query", "-q", help=QUERY_HELP),
) -> None:
    """Send a GET request.

    Example::

        wcapi get products -q per_page=5 -q status=publish
    """
    _run(ctx, "GET", endpoint, query=query)


def post_command(
    ctx: typer.Context,
    endpoint: str = typer.Argument(help="Endpoint below the API root."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help=DATA_HELP),
) -> None:
    """Send a POST request with a JSON body.

    Example::

        wcapi post products -d '{"name": "Mug", "regular_price": "9.50"}'
    """
    _run(ctx, "POST", endpoint, data=data, needs_body=True)


def put_command(
    ctx: typer.Context,
    endpoint: str = typer.Argument(help="Endpoint below the API root."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help=DATA_HELP),
) -> None:
    """Send a PUT request with a JSON body."""
    _run(ctx, "PUT", endpoint, data=data, needs_body=True)


def delete_command(
    ctx: typer.Context,
    endpoint: str = typer.Argument(help="Endpoint below the API root."),
    query: Optional[list[str]] = typer.Option(None, "--query", "-q", help=QUERY_HELP),
) -> None:
    """Send a DELETE request.

    Example::

        wcapi delete products/42 -q force=true
    """
    _run(ctx, "DELETE", endpoint, query=query)


def options_command(
    ctx: typer.Context,
    endpoint: str = typer.Argument(help="Endpoint below the API root."),
) -> None:
    """Send an OPTIONS request."""
    _run(ctx, "OPTIONS", endpoint)


def sign_command(
    ctx: typer.Context,
    method: str = typer.Argument(help="GET, POST, PUT, DELETE or OPTIONS."),
    endpoint: str = typer.Argument(help="Endpoint below the API root."),
    query: Optional[list[str]] = typer.Option(None, "--query", "-q", help=QUERY_HELP),
) -> None:
    """Print the authenticated URL for a request without sending it."""
    try:
        params = parse_query(query)
        with build_client(_profile_name(ctx)) as client:
            url = client.signed_url(method, endpoint, params)
            if Signer.select_mode(url) == AuthMode.BASIC:
                warning("The URL contains the consumer secret; do not share it.")
            print_data(url)
    except WcapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
