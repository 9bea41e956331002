"""Built-in query-auth strategies.

Each strategy lives in its own sub-package and is registered with a
:class:`~wcapi.auth.Signer` by :func:`~wcapi.auth.create_default_signer`:

- :mod:`wcapi.plugins.basic` -- credentials as query parameters (``https``).
- :mod:`wcapi.plugins.oauth1` -- HMAC-SHA256 signed query (plain ``http``).
"""
