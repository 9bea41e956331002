"""Shared test fixtures for wcapi.

Provides reusable fixtures for credentials, isolated config environments,
output state and mock HTTP executors.  These fixtures are discovered by pytest
and available to all test modules without explicit imports.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import httpx
import pytest

from wcapi.models import Credentials, Profile
from wcapi.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the ``wcapi`` logger after every test.

    Both cache references to sys.stdout/sys.stderr.  When Typer's CliRunner
    redirects those streams and the test finishes, the cached references
    become stale ("I/O operation on closed file").
    """
    yield
    reset_output()
    logger = logging.getLogger("wcapi")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials() -> Credentials:
    """The consumer key/secret pair used by the golden signature vector."""
    return Credentials(consumer_key="ck", consumer_secret="cs")


# ---------------------------------------------------------------------------
# Mock HTTP executor
# ---------------------------------------------------------------------------


class Recorder:
    """Records every request sent through a :class:`httpx.MockTransport`.

    The reply is built by :attr:`responder`, which defaults to an empty
    ``200 OK`` JSON object.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))

    def async_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Forces XDG behaviour, points XDG_CONFIG_HOME and XDG_DATA_HOME at
    subdirectories of tmp_path, clears WCAPI_* environment variables and
    changes the working directory to tmp_path.
    """
    monkeypatch.setattr("wcapi.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["WCAPI_PROFILE", "WCAPI_STORE_URL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def https_profile() -> Profile:
    return Profile(
        name="shop",
        store_url="https://shop.example",
        consumer_key_source="value:ck",
        consumer_secret_source="value:cs",
    )


@pytest.fixture
def http_profile() -> Profile:
    return Profile(
        name="plain",
        store_url="http://shop.example",
        consumer_key_source="value:ck",
        consumer_secret_source="value:cs",
    )


