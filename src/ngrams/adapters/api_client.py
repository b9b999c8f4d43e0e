"""Client facade for the ngrams.dev REST API.

- `search` returns a `Pages` cursor (no I/O until `fetch_next()`).
- `get_ngram`, `get_corpus_info` and `get_total_counts` are single-shot
  request/decode calls without iteration state.
- `search_raw` sends one search request and hands back the body text once
  it has been checked to be a page.

All calls return a `Result`; nothing is raised for network, decoding or status
problems.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import ValidationError

from ngrams.adapters.http_client import RequestIssuer, build_async_client
from ngrams.core.config import ClientSettings
from ngrams.core.domain.corpus import Corpus
from ngrams.core.domain.errors import (
    ConnectionFailure,
    Err,
    Ok,
    ParseFailure,
    Result,
    UnexpectedStatus,
)
from ngrams.core.domain.models import ApiModel, CorpusInfo, Ngram, TotalCounts
from ngrams.core.domain.options import SearchOptions
from ngrams.core.domain.views import SearchRejection, decode_search_body
from ngrams.core.services.pagination import SEARCH_RESOURCE, Pages

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=ApiModel)


def _decode(model: type[M], response: httpx.Response) -> Result[M]:
    try:
        return Ok(model.model_validate_json(response.content))
    except ValidationError as exc:
        failure = ParseFailure.from_validation_error(exc)
        logger.warning("could not decode %s: %s", model.__name__, failure.reason)
        return Err(failure)


class Client:
    """Async API client.

    Usage:
        async with Client() as client:
            pages = client.search("hello * *", Corpus.ENGLISH)
            async for result in pages:
                ...

    The underlying `httpx.AsyncClient` is shared by every cursor created from
    this client. A client passed in by the caller is not closed by `aclose()`.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._owns_http_client = http_client is None
        self._http = http_client or build_async_client(self._settings)
        self._issuer = RequestIssuer(self._http, self._settings)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def issuer(self) -> RequestIssuer:
        return self._issuer

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def search(
        self,
        query: str,
        corpus: Corpus | None = None,
        options: SearchOptions | None = None,
    ) -> Pages:
        return Pages(self._issuer, query, corpus, options)

    async def search_raw(
        self,
        query: str,
        corpus: Corpus | None = None,
        options: SearchOptions | None = None,
    ) -> Result[str]:
        """Send a single search request and return the body text of a page.

        As with the cursor, the body of a 200 or 400 decides the outcome: an
        error object is `BadInput`, a page is returned as text, anything else
        is a `ParseFailure`.
        """

        corpus = corpus or Corpus.default()
        options = options or SearchOptions()
        try:
            response = await self._issuer.get(corpus, SEARCH_RESOURCE, options.to_params(query))
        except httpx.HTTPError as exc:
            return Err(ConnectionFailure(exc))
        if response.status_code not in (httpx.codes.OK, httpx.codes.BAD_REQUEST):
            return Err(UnexpectedStatus(response.status_code))
        try:
            outcome = decode_search_body(response.text)
        except ParseFailure as exc:
            logger.warning("raw search response could not be decoded: %s", exc.reason)
            return Err(exc)
        if isinstance(outcome, SearchRejection):
            return Err(outcome.to_error())
        return Ok(response.text)

    async def get_ngram(self, corpus: Corpus, ngram_id: str) -> Result[Ngram | None]:
        """Look up an n-gram by id; `Ok(None)` when the server answers 404."""

        try:
            response = await self._issuer.get(corpus, ngram_id)
        except httpx.HTTPError as exc:
            logger.warning("ngram lookup failed: %s", exc)
            return Err(ConnectionFailure(exc))
        if response.status_code == httpx.codes.OK:
            return _decode(Ngram, response)
        if response.status_code == httpx.codes.NOT_FOUND:
            return Ok(None)
        return Err(UnexpectedStatus(response.status_code))

    async def get_corpus_info(self, corpus: Corpus) -> Result[CorpusInfo]:
        return await self._get_record(corpus, "info", CorpusInfo)

    async def get_total_counts(self, corpus: Corpus) -> Result[TotalCounts]:
        return await self._get_record(corpus, "total_counts", TotalCounts)

    async def _get_record(self, corpus: Corpus, resource: str, model: type[M]) -> Result[M]:
        try:
            response = await self._issuer.get(corpus, resource)
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", resource, exc)
            return Err(ConnectionFailure(exc))
        if response.status_code != httpx.codes.OK:
            logger.warning("%s returned unexpected status %d", resource, response.status_code)
            return Err(UnexpectedStatus(response.status_code))
        return _decode(model, response)
