"""Tests for query parameter normalisation and form encoding."""

from __future__ import annotations

from collections import OrderedDict

import pytest

from wcapi.params import encode_query, normalize_params, percent_encode, sort_pairs


class TestNormalizeParams:
    def test_none(self) -> None:
        assert normalize_params(None) == []

    def test_mapping(self) -> None:
        assert normalize_params({"per_page": 5, "page": "2"}) == [("per_page", "5"), ("page", "2")]

    def test_pairs_keep_repeated_keys(self) -> None:
        pairs = [("filter[x]", "1"), ("filter[x]", "2")]
        assert normalize_params(pairs) == pairs

    def test_list_values_expand_in_order(self) -> None:
        assert normalize_params({"include": [3, 1, 2]}) == [
            ("include", "3"),
            ("include", "1"),
            ("include", "2"),
        ]

    def test_booleans(self) -> None:
        assert normalize_params({"force": True, "dry": False}) == [("force", "true"), ("dry", "false")]

    def test_returns_fresh_list(self) -> None:
        pairs = [("a", "1")]
        result = normalize_params(pairs)
        result.append(("b", "2"))
        assert pairs == [("a", "1")]

    def test_does_not_mutate_mapping(self) -> None:
        params = OrderedDict(a="1")
        normalize_params(params)
        assert params == OrderedDict(a="1")


class TestEncoding:
    @pytest.mark.parametrize(
        "raw, encoded",
        [
            ("abcXYZ019-_.~", "abcXYZ019-_.~"),
            ("a b", "a+b"),
            ("a/b", "a%2Fb"),
            ("a&b=c", "a%26b%3Dc"),
            ("filter[limit]", "filter%5Blimit%5D"),
            ("ä", "%C3%A4"),
        ],
    )
    def test_percent_encode(self, raw: str, encoded: str) -> None:
        assert percent_encode(raw) == encoded

    def test_sort_pairs_by_key_then_value(self) -> None:
        assert sort_pairs([("b", "1"), ("a", "2"), ("a", "1")]) == [("a", "1"), ("a", "2"), ("b", "1")]

    def test_encode_query_orders_by_key(self) -> None:
        assert encode_query([("z", "1"), ("a", "x y")]) == "a=x+y&z=1"

    def test_encode_query_keeps_value_order_of_repeated_keys(self) -> None:
        assert encode_query([("t", "2"), ("a", "0"), ("t", "1")]) == "a=0&t=2&t=1"

    def test_encode_query_escapes_brackets(self) -> None:
        assert encode_query([("filter[limit]", "5")]) == "filter%5Blimit%5D=5"

    def test_encode_query_empty(self) -> None:
        assert encode_query([]) == ""
