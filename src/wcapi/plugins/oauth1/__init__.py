"""OAuth 1.0a query signing plugin.

Implements the ``oauth1`` auth mode used over plain ``http``: the request
is signed with HMAC-SHA256 and only the signature, never the consumer
secret, is sent.

See Also:
    :class:`~wcapi.plugins.oauth1.plugin.OAuth1QueryAuth`
    :mod:`wcapi.auth.base` for the strategy interface contract.
"""

from wcapi.plugins.oauth1.plugin import (
    SIGNATURE_METHOD,
    OAuth1QueryAuth,
    hmac_sha256_signature,
    parameter_string,
    signature_base_string,
    signing_key,
)

__all__ = [
    "SIGNATURE_METHOD",
    "OAuth1QueryAuth",
    "hmac_sha256_signature",
    "parameter_string",
    "signature_base_string",
    "signing_key",
]
