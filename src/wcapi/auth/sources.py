"""Injectable clock and nonce sources for OAuth signing.

OAuth signatures depend on the current time and on fresh randomness.  Both
are passed into :class:`~wcapi.plugins.oauth1.OAuth1QueryAuth` as plain
callables so production code reads the real clock and entropy while tests
pin them to fixed values.
"""

from __future__ import annotations

import hashlib
import secrets
import time
from datetime import datetime
from typing import Callable, Union

from wcapi.exceptions import EntropyError

Clock = Callable[[], int]
"""Returns the current time in whole Unix seconds."""

NonceSource = Callable[[], str]
"""Returns a fresh single-use nonce string."""

NONCE_BYTES = 16


def system_clock() -> int:
    """Read the wall clock."""
    return int(time.time())


def fixed_clock(moment: Union[datetime, int]) -> Clock:
    """Return a clock that always reports *moment*.

    Naive datetimes are interpreted in local time, as
    :meth:`datetime.timestamp` does.
    """
    seconds = int(moment.timestamp()) if isinstance(moment, datetime) else int(moment)

    def _clock() -> int:
        return seconds

    return _clock


def random_nonce() -> str:
    """Return the SHA-1 hex digest of 16 cryptographically random bytes.

    Raises:
        EntropyError: If the operating system cannot supply random bytes.
    """
    try:
        raw = secrets.token_bytes(NONCE_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise EntropyError(f"Cannot read random bytes for OAuth nonce: {exc}") from exc
    return hashlib.sha1(raw).hexdigest()


def fixed_nonce(value: str) -> NonceSource:
    """Return a nonce source that always yields *value*.  For tests only."""

    def _nonce() -> str:
        return value

    return _nonce
