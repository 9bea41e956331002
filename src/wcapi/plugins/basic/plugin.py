"""Basic query authentication plugin.

This module provides :class:`BasicQueryAuth`, which implements the
``basic`` auth mode: the consumer key and secret are appended to the
caller's parameters as ``consumer_key`` and ``consumer_secret``.  No
signature is computed, so this mode is only ever selected for ``https``
URLs where the transport keeps the query confidential.

See Also:
    :class:`wcapi.auth.base.QueryAuth` for the base interface.
"""

from __future__ import annotations

from wcapi.auth.base import QueryAuth, SigningContext
from wcapi.models import AuthMode, Credentials
from wcapi.params import Pair


class BasicQueryAuth(QueryAuth):
    """Authenticate by sending the credentials as plain query parameters.

    The output is idempotent: identical input always yields the same
    parameter list.
    """

    @property
    def auth_mode(self) -> AuthMode:
        return AuthMode.BASIC

    def authenticate(self, context: SigningContext, credentials: Credentials) -> list[Pair]:
        """Return the caller's parameters plus ``consumer_key`` and ``consumer_secret``.

        Args:
            context: The request being authenticated.
            credentials: The client's consumer key and secret.

        Returns:
            A new list of ``(key, value)`` pairs.
        """
        return [
            *context.params,
            ("consumer_key", credentials.consumer_key),
            ("consumer_secret", credentials.secret),
        ]
