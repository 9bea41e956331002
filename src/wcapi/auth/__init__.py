"""Query-string authentication for wcapi.

This package turns a request (method, URL, parameters) into the single
authenticated query string the store API expects.  Two strategies exist:
credentials in the query over ``https`` and an HMAC-SHA256 OAuth 1.0a
signature over plain ``http``.

The main entry points are:

- :class:`QueryAuth` -- abstract base class for authentication strategies.
- :class:`Signer` -- registry that picks the strategy from the URL scheme.
- :func:`create_default_signer` -- factory returning a :class:`Signer`
  with both built-in strategies registered.

Typical usage::

    from wcapi.auth import create_default_signer
    from wcapi.models import Credentials

    signer = create_default_signer(Credentials(consumer_key="ck", consumer_secret="cs"))
    query = signer.sign("GET", "http://shop.example/wc-api/v3/products")
"""

from wcapi.auth.base import QueryAuth, SigningContext
from wcapi.auth.manager import Signer, create_default_signer
from wcapi.auth.sources import fixed_clock, fixed_nonce, random_nonce, system_clock

__all__ = [
    "QueryAuth",
    "Signer",
    "SigningContext",
    "create_default_signer",
    "fixed_clock",
    "fixed_nonce",
    "random_nonce",
    "system_clock",
]
