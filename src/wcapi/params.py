"""Request parameter normalisation and form encoding.

Callers may pass query parameters as a mapping or as an ordered sequence of
``(key, value)`` pairs.  Both are normalised into a *fresh* list of string
pairs for every request, so repeated keys (array-style parameters such as
``filter[status]``) survive and no container is shared between requests.

Percent-encoding everywhere in this package is form encoding: unreserved
characters (``A-Z a-z 0-9 - _ . ~``) pass through, a space becomes ``+``
and every other byte of the UTF-8 encoding becomes ``%XX``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Union
from urllib.parse import quote_plus, urlencode

Pair = tuple[str, str]

ParamsInput = Union[Mapping[str, Any], Iterable[tuple[str, Any]], None]
"""What the public request methods accept for query parameters."""


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_params(params: ParamsInput) -> list[Pair]:
    """Return *params* as a new list of ``(key, value)`` string pairs.

    List and tuple values in a mapping expand into one pair per element, in
    order.  ``None`` yields an empty list.
    """
    if params is None:
        return []
    items = params.items() if isinstance(params, Mapping) else params
    pairs: list[Pair] = []
    for key, value in items:
        if isinstance(value, (list, tuple)):
            pairs.extend((str(key), _stringify(v)) for v in value)
        else:
            pairs.append((str(key), _stringify(value)))
    return pairs


def sort_pairs(pairs: Iterable[Pair]) -> list[Pair]:
    """Sort pairs by key, then by value, in ascending code point order."""
    return sorted(pairs)


def percent_encode(value: str) -> str:
    """Form-encode a single string (``/``, ``&`` and ``=`` are escaped too)."""
    return quote_plus(value, safe="")


def encode_query(pairs: Iterable[Pair]) -> str:
    """Form-encode *pairs* as a query string, ordered by key.

    The sort is stable, so values of a repeated key keep their order.
    """
    return urlencode(sorted(pairs, key=lambda pair: pair[0]))
