"""wcapi -- signed request client for the WooCommerce store REST API.

The package authenticates every request in one of two ways, depending on
the transport:

* over ``https`` the consumer key and secret travel as plain query
  parameters (*Basic mode*);
* over plain ``http`` the request is signed OAuth 1.0a style with
  HMAC-SHA256 and only the signature leaves the process (*OAuth1 mode*).

Typical usage::

    from wcapi import Client

    with Client("https://shop.example", "ck_...", "cs_...") as client:
        with client.get("products", {"per_page": "5"}) as body:
            products = body.json()

Modules:
    client: blocking and asyncio clients plus the request builder.
    auth: the :class:`~wcapi.auth.Signer` and its strategy interface.
    plugins: Basic and OAuth1 query-auth strategies.
    models: Pydantic models shared across the package.
    config: XDG-aware profile management for the command line.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer command-line entry point.
"""

__version__ = "1.0.0"

USER_AGENT = f"WooCommerce API Client-Python/{__version__}"

from wcapi.client import AsyncClient, Client  # noqa: E402
from wcapi.models import ClientOptions  # noqa: E402

__all__ = ["AsyncClient", "Client", "ClientOptions", "USER_AGENT", "__version__"]
