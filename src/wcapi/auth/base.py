"""Abstract base class for query-authentication strategies.

This module defines the two foundational types of the signing subsystem:

- :class:`SigningContext` -- the transient, per-request bundle of method,
  target URL and parameters that a strategy authenticates.
- :class:`QueryAuth` -- the abstract base class every authentication mode
  extends.

A strategy turns a :class:`SigningContext` plus the client's
:class:`~wcapi.models.Credentials` into the complete list of query
parameters for the request.  The caller's parameters are always part of
that list; there is no separate unsigned query string.

See Also:
    :mod:`wcapi.auth.manager` for strategy registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from wcapi.models import AuthMode, Credentials
from wcapi.params import Pair, encode_query


@dataclass
class SigningContext:
    """Everything needed to authenticate one request.

    Created per request and discarded once the query string is built.

    Attributes:
        method: Uppercase HTTP verb exactly as it will be dispatched.
        url: Absolute target URL without a query string.
        params: The caller's parameters, already normalised into a list
            owned by this context.
    """

    method: str
    url: str
    params: list[Pair] = field(default_factory=list)


class QueryAuth(ABC):
    """Abstract base class for query-parameter authentication strategies.

    Every concrete mode must subclass this and provide:

    1. An :attr:`auth_mode` property naming the :class:`~wcapi.models.AuthMode`
       it implements.
    2. An :meth:`authenticate` implementation returning the full parameter
       list (caller parameters plus auth fields).

    Strategies are registered with :class:`~wcapi.auth.manager.Signer` and
    looked up by their ``auth_mode`` for each request.
    """

    @property
    @abstractmethod
    def auth_mode(self) -> AuthMode:
        """Return the :class:`~wcapi.models.AuthMode` this strategy handles."""
        ...

    @abstractmethod
    def authenticate(self, context: SigningContext, credentials: Credentials) -> list[Pair]:
        """Return the caller's parameters extended with the auth fields.

        Implementations must not mutate ``context.params``.

        Args:
            context: The request being authenticated.
            credentials: The client's consumer key and secret.

        Returns:
            A new list of ``(key, value)`` pairs.
        """
        ...

    def query(self, context: SigningContext, credentials: Credentials) -> str:
        """Authenticate *context* and form-encode the result as a query string."""
        return encode_query(self.authenticate(context, credentials))
