"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~wcapi.exceptions.WcapiError` subclass.
Shell wrappers can inspect the exit code to tell a rejected credential
from an unreachable store without parsing stderr.

Example::

    $ wcapi get products
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the store rejected the consumer key
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unsupported HTTP method."""

EXIT_AUTH_FAILURE = 3
"""The store rejected the credentials (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The store returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, TLS failure, connection refused)."""

EXIT_ENTROPY_ERROR = 7
"""Random bytes for an OAuth nonce could not be obtained."""

EXIT_REQUEST_FAILED = 8
"""The store answered with a status other than 200 / 201 not covered above."""
