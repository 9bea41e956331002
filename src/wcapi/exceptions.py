"""Exception hierarchy for wcapi.

All exceptions inherit from :class:`WcapiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`wcapi.exit_codes`.
The CLI entry point in :func:`wcapi.app.main` catches ``WcapiError`` and
exits with the appropriate code.

Transport failures raised by :mod:`httpx` are *not* wrapped by the
library clients; they reach the caller unchanged. Only the CLI converts
them into :class:`ConnectionError_`.

Subclass hierarchy::

    WcapiError (exit 1)
    +-- ConfigError             (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- EntropyError            (exit 7)
    +-- ConnectionError_        (exit 6)
    +-- RequestFailedError      (exit 8)
        +-- AuthError           (exit 3)
        +-- NotFoundError       (exit 4)
        +-- ServerError         (exit 5)
"""

from __future__ import annotations

from wcapi.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_ENTROPY_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_REQUEST_FAILED,
    EXIT_SERVER_ERROR,
)


class WcapiError(Exception):
    """Base exception for all wcapi errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`wcapi.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(WcapiError):
    """Raised for configuration problems (unparseable store URL, missing profiles, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(WcapiError):
    """Raised before any network I/O for an unsupported HTTP method or a missing request body."""

    exit_code = EXIT_INVALID_USAGE


class EntropyError(WcapiError):
    """Raised when the random source for an OAuth nonce fails.

    Signing cannot proceed without entropy, so this is never retried or
    replaced with a weaker nonce.
    """

    exit_code = EXIT_ENTROPY_ERROR


class ConnectionError_(WcapiError):
    """Raised by the CLI on network-level failures (timeout, DNS, TLS, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class RequestFailedError(WcapiError):
    """Raised when the store answers with a status other than 200 or 201.

    The message carries the status line (e.g. ``"Request failed: 409
    Conflict"``). The response body, read up to a size cap, is kept on
    :attr:`body` so callers can inspect server-provided error detail.

    Args:
        message: Human-readable error description.
        status_code: The HTTP status code.
        reason: The HTTP reason phrase.
        body: Up to the first 64 KiB of the response body.
    """

    exit_code = EXIT_REQUEST_FAILED

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        reason: str = "",
        body: bytes = b"",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body

    @property
    def status(self) -> str:
        """The status line, e.g. ``"404 Not Found"``."""
        return f"{self.status_code} {self.reason}".strip()


class AuthError(RequestFailedError):
    """Raised when the store rejects the credentials (HTTP 401 / 403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(RequestFailedError):
    """Raised when the store returns HTTP 404 (resource not found)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(RequestFailedError):
    """Raised when the store returns an HTTP 5xx server error."""

    exit_code = EXIT_SERVER_ERROR
