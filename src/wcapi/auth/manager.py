"""Signer -- registry and dispatcher for query-auth strategies.

The :class:`Signer` is the central coordinator of the signing subsystem.
It maps each :class:`~wcapi.models.AuthMode` to a concrete
:class:`~wcapi.auth.base.QueryAuth` strategy, picks the mode from the
target URL's scheme, and returns the finished query string.

For most use cases, call :func:`create_default_signer` to get a signer
pre-loaded with the Basic and OAuth1 strategies.

See Also:
    :class:`~wcapi.client.builder.RequestBuilder` -- appends the query
    string produced here to every outgoing URL.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

from wcapi.auth.base import QueryAuth, SigningContext
from wcapi.auth.sources import Clock, NonceSource
from wcapi.exceptions import ConfigError
from wcapi.models import AuthMode, Credentials
from wcapi.params import ParamsInput, normalize_params

logger = logging.getLogger(__name__)


class Signer:
    """Produces the authenticated query string for a single request.

    Holds the immutable :class:`~wcapi.models.Credentials` and the
    registered strategies; every call builds its own
    :class:`~wcapi.auth.base.SigningContext`, so one signer is safe to share
    between threads.

    Example::

        signer = create_default_signer(Credentials(consumer_key="ck", consumer_secret="cs"))
        query = signer.sign("GET", "http://shop.example/wc-api/v3/orders", {"page": "2"})
    """

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials
        self._strategies: dict[AuthMode, QueryAuth] = {}

    def register(self, strategy: QueryAuth) -> None:
        """Register a strategy, keyed by its :attr:`~QueryAuth.auth_mode`.

        A strategy already registered for the same mode is replaced.
        """
        self._strategies[strategy.auth_mode] = strategy

    def get_strategy(self, mode: AuthMode) -> QueryAuth:
        """Return the strategy registered for *mode*.

        Raises:
            ConfigError: If nothing is registered for *mode*.
        """
        strategy = self._strategies.get(mode)
        if strategy is None:
            available = ", ".join(sorted(m.value for m in self._strategies)) or "(none)"
            raise ConfigError(
                f"No query-auth strategy registered for mode '{mode.value}'. "
                f"Available modes: {available}"
            )
        return strategy

    @staticmethod
    def select_mode(url: str) -> AuthMode:
        """Pick :attr:`AuthMode.BASIC` for ``https`` URLs, :attr:`AuthMode.OAUTH1` otherwise."""
        if urlsplit(url).scheme.lower() == "https":
            return AuthMode.BASIC
        return AuthMode.OAUTH1

    def sign(self, method: str, url: str, params: ParamsInput = None) -> str:
        """Return the form-encoded query string that authenticates a request.

        Args:
            method: Uppercase HTTP verb exactly as it will be dispatched.
            url: Absolute target URL without a query string.
            params: Caller query parameters; copied, never mutated.

        Returns:
            The query string, without a leading ``?``.

        Raises:
            EntropyError: If an OAuth nonce cannot be generated.
        """
        mode = self.select_mode(url)
        logger.debug("Signing %s %s in %s mode", method, urlsplit(url).path, mode.value)
        context = SigningContext(method=method, url=url, params=normalize_params(params))
        return self.get_strategy(mode).query(context, self._credentials)

    def list_modes(self) -> list[str]:
        """Return the registered mode identifiers, sorted."""
        return sorted(mode.value for mode in self._strategies)


def create_default_signer(
    credentials: Credentials,
    clock: Optional[Clock] = None,
    nonce_source: Optional[NonceSource] = None,
) -> Signer:
    """Create a :class:`Signer` with the built-in strategies registered.

    - ``basic`` -- credentials as query parameters, for ``https``.
    - ``oauth1`` -- HMAC-SHA256 signed query, for everything else.

    Args:
        credentials: Consumer key and secret.
        clock: Source of ``oauth_timestamp``; defaults to the wall clock.
        nonce_source: Source of ``oauth_nonce``; defaults to
            :func:`~wcapi.auth.sources.random_nonce`.
    """
    from wcapi.plugins.basic import BasicQueryAuth
    from wcapi.plugins.oauth1 import OAuth1QueryAuth

    signer = Signer(credentials)
    signer.register(BasicQueryAuth())
    signer.register(OAuth1QueryAuth(clock=clock, nonce_source=nonce_source))
    return signer
