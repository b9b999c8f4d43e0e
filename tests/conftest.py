"""
Shared pytest fixtures for the ngrams client tests.

Provides:
- JSON payload builders mirroring the API's wire format
- A scripted fake API served through httpx.MockTransport
- A Client wired to that fake API
- Logging capture
"""

import json
import logging
from typing import Any, Callable, Iterable

import httpx
import pytest

from ngrams import Client, ClientSettings
from ngrams.adapters.http_client import build_async_client

TEST_BASE_URL = "https://api.ngrams.test"


# ============================================================================
# Payload builders
# ============================================================================

def query_token(text: str, kind: str = "TERM") -> dict[str, Any]:
    return {"kind": kind, "text": text}


def hello_star_star() -> list[dict[str, Any]]:
    """Query tokens of `hello * *`."""
    return [query_token("hello"), query_token("*", "STAR"), query_token("*", "STAR")]


def ngram_token(text: str, kind: str = "TERM", **flags: bool) -> dict[str, Any]:
    token: dict[str, Any] = {"kind": kind, "text": text}
    token.update(flags)
    return token


def ngram(index: int, words: Iterable[str] = ("hello", "my", "friend"), **extra: Any) -> dict[str, Any]:
    abs_count = 1000 - index
    record: dict[str, Any] = {
        "id": f"{index:032x}",
        "absTotalMatchCount": abs_count,
        "relTotalMatchCount": abs_count / 2_099_421_345.0,
        "tokens": [ngram_token(w) for w in words],
    }
    record.update(extra)
    return record


def search_page(
    *,
    size: int = 3,
    offset: int = 0,
    next_token: str | None = None,
    query_tokens: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "queryTokens": query_tokens if query_tokens is not None else hello_star_star(),
        "ngrams": [ngram(offset + i) for i in range(size)],
    }
    if next_token is not None:
        body["nextPageToken"] = next_token
    return body


def error_body(code: str, query_tokens: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": {"code": code}}
    if query_tokens is not None:
        body["queryTokens"] = query_tokens
    return body


def total_counts_body(length: int = 550) -> dict[str, Any]:
    return {
        "minYear": 1470,
        "maxYear": 2019,
        "matchCounts": [[bucket * 10 + 1] * length for bucket in range(5)],
    }


def corpus_stat(num_ngrams: int) -> dict[str, Any]:
    return {
        "numNgrams": num_ngrams,
        "minYear": 1470,
        "maxYear": 2019,
        "minMatchCount": 1,
        "maxMatchCount": 1_922_716_631,
        "minTotalMatchCount": 40,
        "maxTotalMatchCount": 115_513_165_249,
    }


# ============================================================================
# Fake API
# ============================================================================

class ScriptedApi:
    """
    MockTransport handler replaying a fixed list of responses.

    Each item is an `httpx.Response`, an exception to raise, or a callable
    taking the request and returning either of those.
    """

    def __init__(self, responses: Iterable[Any] = ()):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def add(self, *responses: Any) -> "ScriptedApi":
        self.responses.extend(responses)
        return self

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request: {request.url}")
        item = self.responses.pop(0)
        if callable(item) and not isinstance(item, httpx.Response):
            item = item(request)
            if hasattr(item, "__await__"):
                item = await item
        if isinstance(item, BaseException):
            raise item
        return item


def json_response(body: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(body).encode("utf-8"),
                          headers={"content-type": "application/json"})


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(base_url=TEST_BASE_URL, user_agent="ngrams-tests/1.0")


@pytest.fixture
def api() -> ScriptedApi:
    return ScriptedApi()


@pytest.fixture
async def client(settings: ClientSettings, api: ScriptedApi):
    http_client = build_async_client(settings, transport=httpx.MockTransport(api))
    async with Client(settings, http_client=http_client) as c:
        yield c
    await http_client.aclose()


@pytest.fixture
async def make_client(settings: ClientSettings):
    """Build clients around arbitrary MockTransport handlers; all closed on teardown."""

    created: list[tuple[Client, httpx.AsyncClient]] = []

    def _make(handler: Callable) -> Client:
        http_client = build_async_client(settings, transport=httpx.MockTransport(handler))
        client = Client(settings, http_client=http_client)
        created.append((client, http_client))
        return client

    yield _make

    for client, http_client in created:
        await client.aclose()
        await http_client.aclose()


# ============================================================================
# Logging Fixtures
# ============================================================================

@pytest.fixture
def captured_logs(caplog):
    """Capture library logs at DEBUG level."""
    caplog.set_level(logging.DEBUG, logger="ngrams")
    yield caplog
