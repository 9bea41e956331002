"""OAuth 1.0a query signing plugin.

This module provides :class:`OAuth1QueryAuth`, which implements the
``oauth1`` auth mode.  Four protocol fields are added to the caller's
parameters (``oauth_consumer_key``, ``oauth_timestamp``, ``oauth_nonce``,
``oauth_signature_method``), the whole set is signed, and the result is
appended as ``oauth_signature``.

The signature is computed in four steps, each exposed as a module-level
function:

1. :func:`parameter_string` -- pairs sorted by key then value, rendered as
   raw ``key=value`` joined with ``&``.
2. :func:`signature_base_string` -- ``METHOD&enc(url)&enc(parameters)``.
3. :func:`signing_key` -- the consumer secret followed by ``&``.
4. :func:`hmac_sha256_signature` -- base64 of the HMAC-SHA256 digest.

See Also:
    :class:`wcapi.auth.base.QueryAuth` for the base interface.
    :mod:`wcapi.auth.sources` for the clock and nonce sources.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Iterable
from typing import Optional

from wcapi.auth.base import QueryAuth, SigningContext
from wcapi.auth.sources import Clock, NonceSource, random_nonce, system_clock
from wcapi.models import AuthMode, Credentials
from wcapi.params import Pair, percent_encode, sort_pairs

SIGNATURE_METHOD = "HMAC-SHA256"


def parameter_string(pairs: Iterable[Pair]) -> str:
    """Render *pairs* sorted by (key, value) as ``k=v&k=v`` with raw values."""
    return "&".join(f"{key}={value}" for key, value in sort_pairs(pairs))


def signature_base_string(method: str, url: str, params: str) -> str:
    """Join the method with the percent-encoded URL and parameter string."""
    return "&".join([method, percent_encode(url), percent_encode(params)])


def signing_key(consumer_secret: str) -> str:
    """Return the HMAC key: the consumer secret plus an ``&`` separator.

    The token secret that would follow the separator is always empty for
    this API, for every API version.
    """
    return consumer_secret + "&"


def hmac_sha256_signature(key: str, base_string: str) -> str:
    """Return the standard, padded base64 encoding of HMAC-SHA256(key, base_string)."""
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


class OAuth1QueryAuth(QueryAuth):
    """Authenticate with an HMAC-SHA256 signed OAuth 1.0a query.

    Args:
        clock: Source of ``oauth_timestamp`` in Unix seconds.  Defaults to
            the wall clock.
        nonce_source: Source of ``oauth_nonce``.  Defaults to the SHA-1 hex
            digest of 16 random bytes.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        nonce_source: Optional[NonceSource] = None,
    ) -> None:
        self._clock = clock or system_clock
        self._nonce_source = nonce_source or random_nonce

    @property
    def auth_mode(self) -> AuthMode:
        return AuthMode.OAUTH1

    def oauth_fields(self, credentials: Credentials) -> list[Pair]:
        """Return the protocol fields for one request, drawing a fresh timestamp and nonce.

        Raises:
            EntropyError: If the default nonce source cannot read random bytes.
        """
        return [
            ("oauth_consumer_key", credentials.consumer_key),
            ("oauth_timestamp", str(self._clock())),
            ("oauth_nonce", self._nonce_source()),
            ("oauth_signature_method", SIGNATURE_METHOD),
        ]

    def signature(self, context: SigningContext, pairs: Iterable[Pair], credentials: Credentials) -> str:
        """Compute ``oauth_signature`` for *pairs* sent as *context*."""
        base_string = signature_base_string(context.method, context.url, parameter_string(pairs))
        return hmac_sha256_signature(signing_key(credentials.secret), base_string)

    def authenticate(self, context: SigningContext, credentials: Credentials) -> list[Pair]:
        """Return the caller's parameters plus the signed OAuth fields.

        Args:
            context: The request being authenticated.  ``context.method``
                must be the verb that will actually be dispatched.
            credentials: The client's consumer key and secret.

        Returns:
            A new list of ``(key, value)`` pairs ending with
            ``oauth_signature``.
        """
        pairs = [*context.params, *self.oauth_fields(credentials)]
        pairs.append(("oauth_signature", self.signature(context, pairs, credentials)))
        return pairs
