"""Tests for the Basic and OAuth1 query-auth strategies and the OAuth1 signature steps."""

from __future__ import annotations

from urllib.parse import parse_qsl

import pytest

from wcapi.auth.base import SigningContext
from wcapi.auth.sources import fixed_clock, fixed_nonce
from wcapi.models import AuthMode, Credentials
from wcapi.plugins.basic import BasicQueryAuth
from wcapi.plugins.oauth1 import (
    SIGNATURE_METHOD,
    OAuth1QueryAuth,
    hmac_sha256_signature,
    parameter_string,
    signature_base_string,
    signing_key,
)

GOLDEN_URL = "http://example.com/wc-api/v3/products"
GOLDEN_PARAMS = [
    ("oauth_consumer_key", "ck"),
    ("oauth_timestamp", "1000000000"),
    ("oauth_nonce", "abc123"),
    ("oauth_signature_method", "HMAC-SHA256"),
]
GOLDEN_PARAMETER_STRING = (
    "oauth_consumer_key=ck&oauth_nonce=abc123"
    "&oauth_signature_method=HMAC-SHA256&oauth_timestamp=1000000000"
)
GOLDEN_BASE_STRING = (
    "GET&http%3A%2F%2Fexample.com%2Fwc-api%2Fv3%2Fproducts"
    "&oauth_consumer_key%3Dck%26oauth_nonce%3Dabc123"
    "%26oauth_signature_method%3DHMAC-SHA256%26oauth_timestamp%3D1000000000"
)
GOLDEN_SIGNATURE = "bHWYNlH/EnFg3P5zc/obiKcUdO0MNaxLGKCSAYmM4gA="

# Same request with filter[limit]=5 added by the caller.
FILTERED_SIGNATURE = "d/L7g2mc9Fd2gO2tVm/U2dwxjVxNRhmJ6umqI25mpvo="


def _oauth(timestamp: int = 1000000000, nonce: str = "abc123") -> OAuth1QueryAuth:
    return OAuth1QueryAuth(clock=fixed_clock(timestamp), nonce_source=fixed_nonce(nonce))


# ---------------------------------------------------------------------------
# Signature steps (golden vector)
# ---------------------------------------------------------------------------


class TestSignatureSteps:
    def test_parameter_string_sorted_by_key(self) -> None:
        assert parameter_string(GOLDEN_PARAMS) == GOLDEN_PARAMETER_STRING

    def test_parameter_string_uses_raw_values(self) -> None:
        assert parameter_string([("q", "a b&c")]) == "q=a b&c"

    def test_parameter_string_sorts_repeated_keys_by_value(self) -> None:
        pairs = [("filter[x]", "2"), ("filter[x]", "1"), ("a", "z")]
        assert parameter_string(pairs) == "a=z&filter[x]=1&filter[x]=2"

    def test_base_string(self) -> None:
        assert signature_base_string("GET", GOLDEN_URL, GOLDEN_PARAMETER_STRING) == GOLDEN_BASE_STRING

    def test_base_string_keeps_method_as_given(self) -> None:
        assert signature_base_string("DELETE", "http://x", "").startswith("DELETE&")

    @pytest.mark.parametrize("secret", ["cs", "", "s&cret"])
    def test_signing_key_always_ends_with_ampersand(self, secret: str) -> None:
        assert signing_key(secret) == secret + "&"

    def test_golden_signature(self) -> None:
        assert hmac_sha256_signature("cs&", GOLDEN_BASE_STRING) == GOLDEN_SIGNATURE

    def test_signature_is_padded_base64(self) -> None:
        signature = hmac_sha256_signature("key&", "anything")
        # 32-byte digest -> 44 base64 characters with one '=' of padding.
        assert len(signature) == 44
        assert signature.endswith("=")


# ---------------------------------------------------------------------------
# OAuth1QueryAuth
# ---------------------------------------------------------------------------


class TestOAuth1QueryAuth:
    def test_auth_mode(self) -> None:
        assert OAuth1QueryAuth().auth_mode == AuthMode.OAUTH1

    def test_golden_vector_end_to_end(self, credentials: Credentials) -> None:
        pairs = _oauth().authenticate(SigningContext("GET", GOLDEN_URL), credentials)
        assert pairs[-1] == ("oauth_signature", GOLDEN_SIGNATURE)

    def test_caller_params_are_signed(self, credentials: Credentials) -> None:
        context = SigningContext("GET", GOLDEN_URL, [("filter[limit]", "5")])
        pairs = _oauth().authenticate(context, credentials)
        assert dict(pairs)["oauth_signature"] == FILTERED_SIGNATURE
        assert ("filter[limit]", "5") in pairs

    def test_adds_protocol_fields(self, credentials: Credentials) -> None:
        pairs = dict(_oauth().authenticate(SigningContext("GET", GOLDEN_URL), credentials))
        assert pairs["oauth_consumer_key"] == "ck"
        assert pairs["oauth_timestamp"] == "1000000000"
        assert pairs["oauth_nonce"] == "abc123"
        assert pairs["oauth_signature_method"] == SIGNATURE_METHOD

    def test_secret_never_in_output(self) -> None:
        creds = Credentials(consumer_key="ck", consumer_secret="very-secret")
        query = _oauth().query(SigningContext("GET", GOLDEN_URL), creds)
        assert "very-secret" not in query

    def test_does_not_mutate_context_params(self, credentials: Credentials) -> None:
        params = [("per_page", "5")]
        context = SigningContext("GET", GOLDEN_URL, params)
        _oauth().authenticate(context, credentials)
        assert context.params == [("per_page", "5")]

    def test_fixed_inputs_are_deterministic(self, credentials: Credentials) -> None:
        context = SigningContext("GET", GOLDEN_URL, [("status", "any")])
        first = _oauth().authenticate(context, credentials)
        second = _oauth().authenticate(context, credentials)
        assert first == second

    def test_different_nonce_changes_signature(self, credentials: Credentials) -> None:
        context = SigningContext("GET", GOLDEN_URL)
        first = dict(_oauth(nonce="n1").authenticate(context, credentials))
        second = dict(_oauth(nonce="n2").authenticate(context, credentials))
        assert first["oauth_signature"] != second["oauth_signature"]

    def test_different_timestamp_changes_signature(self, credentials: Credentials) -> None:
        context = SigningContext("GET", GOLDEN_URL)
        first = dict(_oauth(timestamp=1).authenticate(context, credentials))
        second = dict(_oauth(timestamp=2).authenticate(context, credentials))
        assert first["oauth_signature"] != second["oauth_signature"]

    def test_default_sources_differ_per_request(self, credentials: Credentials) -> None:
        auth = OAuth1QueryAuth()
        context = SigningContext("GET", GOLDEN_URL)
        first = dict(auth.authenticate(context, credentials))
        second = dict(auth.authenticate(context, credentials))
        assert first["oauth_nonce"] != second["oauth_nonce"]
        assert first["oauth_signature"] != second["oauth_signature"]

    def test_method_is_part_of_signature(self, credentials: Credentials) -> None:
        get = dict(_oauth().authenticate(SigningContext("GET", GOLDEN_URL), credentials))
        delete = dict(_oauth().authenticate(SigningContext("DELETE", GOLDEN_URL), credentials))
        assert get["oauth_signature"] != delete["oauth_signature"]

    def test_query_round_trip(self, credentials: Credentials) -> None:
        caller = [("search", "blue mug"), ("filter[x]", "1"), ("filter[x]", "2"), ("sku", "a/b&c=d")]
        context = SigningContext("GET", GOLDEN_URL, list(caller))
        query = _oauth().query(context, credentials)

        decoded = parse_qsl(query, keep_blank_values=True)
        expected = _oauth().authenticate(context, credentials)
        assert sorted(decoded) == sorted(expected)
        for pair in caller:
            assert decoded.count(pair) == 1


# ---------------------------------------------------------------------------
# BasicQueryAuth
# ---------------------------------------------------------------------------


class TestBasicQueryAuth:
    def test_auth_mode(self) -> None:
        assert BasicQueryAuth().auth_mode == AuthMode.BASIC

    def test_adds_credentials(self, credentials: Credentials) -> None:
        context = SigningContext("GET", "https://shop.example/wc-api/v3/products", [("per_page", "5")])
        pairs = BasicQueryAuth().authenticate(context, credentials)
        assert sorted(pairs) == [("consumer_key", "ck"), ("consumer_secret", "cs"), ("per_page", "5")]

    def test_no_oauth_fields(self, credentials: Credentials) -> None:
        context = SigningContext("GET", "https://shop.example/wc-api/v3/products")
        query = BasicQueryAuth().query(context, credentials)
        assert "oauth_" not in query

    def test_empty_params(self, credentials: Credentials) -> None:
        context = SigningContext("GET", "https://shop.example/")
        assert BasicQueryAuth().query(context, credentials) == "consumer_key=ck&consumer_secret=cs"

    def test_idempotent(self, credentials: Credentials) -> None:
        context = SigningContext("GET", "https://shop.example/", [("a", "1")])
        auth = BasicQueryAuth()
        assert auth.query(context, credentials) == auth.query(context, credentials)

    def test_query_round_trip(self, credentials: Credentials) -> None:
        caller = [("search", "ä ö"), ("tag", "1"), ("tag", "2")]
        context = SigningContext("GET", "https://shop.example/", list(caller))
        decoded = parse_qsl(BasicQueryAuth().query(context, credentials))
        assert sorted(decoded) == sorted(
            caller + [("consumer_key", "ck"), ("consumer_secret", "cs")]
        )
