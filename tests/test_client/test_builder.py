"""Tests for request validation, URL signing and header assembly."""

from __future__ import annotations

import json
from urllib.parse import parse_qs, urlsplit

import pytest

from wcapi import USER_AGENT
from wcapi.auth import fixed_clock, fixed_nonce
from wcapi.client.builder import RequestBuilder, encode_body, validate_method
from wcapi.exceptions import ConfigError, InvalidUsageError
from wcapi.models import ClientOptions, HTTPMethod


def _builder(store_url: str = "https://shop.example", **options) -> RequestBuilder:
    return RequestBuilder.from_options(
        store_url,
        "ck",
        "cs",
        ClientOptions(**options),
        clock=fixed_clock(1000000000),
        nonce_source=fixed_nonce("abc123"),
    )


class TestValidateMethod:
    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    def test_accepts_supported(self, method: str) -> None:
        assert validate_method(method) == HTTPMethod(method)

    @pytest.mark.parametrize("method", ["PATCH", "HEAD", "", "TRACE", "get", "Post", "delete"])
    def test_rejects_unsupported(self, method: str) -> None:
        with pytest.raises(InvalidUsageError, match="Method is not recognised"):
            validate_method(method)


class TestEncodeBody:
    def test_bytes_pass_through(self) -> None:
        assert encode_body(b"\x00raw") == b"\x00raw"

    def test_str_is_utf8(self) -> None:
        assert encode_body('{"name": "ä"}') == '{"name": "ä"}'.encode("utf-8")

    def test_objects_are_json(self) -> None:
        assert json.loads(encode_body({"name": "Mug", "tags": [1, 2]})) == {"name": "Mug", "tags": [1, 2]}


class TestFromOptions:
    def test_invalid_store_url(self) -> None:
        with pytest.raises(ConfigError, match="Invalid store URL"):
            RequestBuilder.from_options("shop.example", "ck", "cs")

    def test_invalid_store_url_does_not_echo_secret(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            RequestBuilder.from_options("ftp://shop.example", "ck", "cs_private")
        assert "cs_private" not in str(exc_info.value)

    def test_oauth_timestamp_option_fixes_clock(self) -> None:
        builder = RequestBuilder.from_options(
            "http://example.com",
            "ck",
            "cs",
            ClientOptions(oauth_timestamp=1000000000),
            nonce_source=fixed_nonce("abc123"),
        )
        query = parse_qs(urlsplit(builder.signed_url("GET", "products")).query)
        assert query["oauth_timestamp"] == ["1000000000"]
        assert query["oauth_signature"] == ["bHWYNlH/EnFg3P5zc/obiKcUdO0MNaxLGKCSAYmM4gA="]

    def test_user_agent_option(self) -> None:
        builder = _builder(user_agent="custom/2")
        assert builder.headers(HTTPMethod.GET)["User-Agent"] == "custom/2"


class TestHeaders:
    def test_get_has_no_content_type(self) -> None:
        headers = _builder().headers(HTTPMethod.GET)
        assert headers == {"User-Agent": USER_AGENT, "Accept": "application/json"}

    @pytest.mark.parametrize("method", [HTTPMethod.POST, HTTPMethod.PUT])
    def test_writes_have_content_type(self, method: HTTPMethod) -> None:
        assert _builder().headers(method)["Content-Type"] == "application/json"


class TestBuild:
    def test_get(self) -> None:
        prepared = _builder().build("GET", "products", {"per_page": 5})
        assert prepared.method == "GET"
        assert prepared.content is None
        assert prepared.url == (
            "https://shop.example/wc-api/v3/products?consumer_key=ck&consumer_secret=cs&per_page=5"
        )

    def test_path_excludes_query(self) -> None:
        prepared = _builder().build("GET", "orders/42")
        assert prepared.path == "/wc-api/v3/orders/42"

    def test_leading_slash_is_ignored(self) -> None:
        assert _builder().build("GET", "/orders").url == _builder().build("GET", "orders").url

    def test_post_body(self) -> None:
        prepared = _builder().build("POST", "products", data={"name": "Mug"})
        assert json.loads(prepared.content) == {"name": "Mug"}
        assert prepared.headers["Content-Type"] == "application/json"

    @pytest.mark.parametrize("method", ["POST", "PUT"])
    def test_write_without_body_rejected(self, method: str) -> None:
        with pytest.raises(InvalidUsageError, match="require a body"):
            _builder().build(method, "products")

    def test_get_ignores_body(self) -> None:
        assert _builder().build("GET", "products", data={"x": 1}).content is None

    def test_delete_keeps_verb(self) -> None:
        prepared = _builder("http://example.com").build("DELETE", "products/7", {"force": "true"})
        assert prepared.method == "DELETE"
        assert "force=true" in urlsplit(prepared.url).query

    def test_store_subdirectory(self) -> None:
        prepared = _builder("https://example.com/shop", api=True).build("GET", "products")
        assert prepared.url.startswith("https://example.com/shop/wp-json/wc/v3/products?")

    def test_single_query_string(self) -> None:
        prepared = _builder("http://example.com").build("GET", "products", [("a", "1")])
        assert prepared.url.count("?") == 1
