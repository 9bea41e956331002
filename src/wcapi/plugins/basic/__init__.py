"""Basic query authentication plugin.

Implements the ``basic`` auth mode, which sends ``consumer_key`` and
``consumer_secret`` as plain query parameters over ``https``.

See Also:
    :class:`~wcapi.plugins.basic.plugin.BasicQueryAuth`
    :mod:`wcapi.auth.base` for the strategy interface contract.
"""

from wcapi.plugins.basic.plugin import BasicQueryAuth

__all__ = ["BasicQueryAuth"]
