"""Paginated search cursor.

`Pages` drives repeated requests against the `search` resource. It owns the
query, a private copy of the options (whose `max_page_count` is the remaining
page budget), the continuation token and the buffer backing the current page
view.

States:
- Active: budget > 0, the next call issues a request.
- Exhausted: budget == 0, every call returns `None` without I/O.

A cursor is single-owner and single-flight: do not await `fetch_next()` from
two tasks at once. State is only mutated after the response has been fully
read and decoded, so cancelling a pending call leaves the cursor as it was.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import AsyncIterator

import httpx

from ngrams.core.domain.corpus import Corpus
from ngrams.core.domain.errors import (
    ConnectionFailure,
    Err,
    Ok,
    ParseFailure,
    Result,
    UnexpectedStatus,
)
from ngrams.core.domain.options import SearchOptions
from ngrams.core.domain.views import (
    PageView,
    ResponseBuffer,
    SearchRejection,
    decode_search_body,
)
from ngrams.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)

SEARCH_RESOURCE = "search"


class Pages:
    """Cursor over the pages of one search query."""

    def __init__(
        self,
        transport: Transport,
        query: str,
        corpus: Corpus | None = None,
        options: SearchOptions | None = None,
    ) -> None:
        self._transport = transport
        self._query = query
        self._corpus = corpus or Corpus.default()
        self._options = dataclasses.replace(options) if options else SearchOptions()
        self._buffer = ResponseBuffer()
        self._next: str | None = None

    @property
    def query(self) -> str:
        return self._query

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    @property
    def options(self) -> SearchOptions:
        return dataclasses.replace(self._options)

    @property
    def remaining_pages(self) -> int:
        return self._options.max_page_count

    @property
    def next_page_token(self) -> str | None:
        return self._next

    @property
    def exhausted(self) -> bool:
        return self._options.max_page_count == 0

    async def fetch_next(self) -> Result[PageView] | None:
        """Fetch the next page.

        Returns `None` once the cursor is exhausted, otherwise `Ok(PageView)`
        or `Err(error)`. The returned view is valid until the next successful
        fetch; call `to_page()` on it to keep the data.
        """

        if self.exhausted:
            return None

        params = self._options.to_params(self._query, self._next)
        try:
            response = await self._transport.get(self._corpus, SEARCH_RESOURCE, params)
        except httpx.HTTPError as exc:
            logger.warning("search request failed (%s): %s", self._corpus.label(), exc)
            return Err(ConnectionFailure(exc))

        if response.status_code not in (httpx.codes.OK, httpx.codes.BAD_REQUEST):
            logger.warning("search returned unexpected status %d", response.status_code)
            return Err(UnexpectedStatus(response.status_code))

        text = response.text
        try:
            outcome = decode_search_body(text)
        except ParseFailure as exc:
            logger.warning("search response could not be decoded: %s", exc.reason)
            return Err(exc)

        if isinstance(outcome, SearchRejection):
            self._options.max_page_count = 0
            self._next = None
            logger.info("search rejected by server: %s", outcome.code.value)
            return Err(outcome.to_error())

        self._buffer.replace(text, outcome.tree)
        if outcome.next_page_token is not None:
            self._options.max_page_count -= 1
            self._next = outcome.next_page_token
        else:
            self._options.max_page_count = 0
            self._next = None

        view = self._buffer.page_view()
        logger.debug(
            "page decoded: %d query tokens, %d ngrams, has_next=%s",
            len(outcome.tree["queryTokens"]),
            len(view),
            self._next is not None,
        )
        if self.exhausted:
            logger.info("search cursor exhausted")
        return Ok(view)

    next = fetch_next

    async def results(self, *, stop_on_error: bool = True) -> AsyncIterator[Result[PageView]]:
        """Yield results until exhaustion.

        Connection, parse and status failures leave the cursor untouched, so
        with `stop_on_error=False` a persistent failure repeats forever; the
        loop body then has to decide when to stop.
        """

        while True:
            result = await self.fetch_next()
            if result is None:
                return
            yield result
            if stop_on_error and result.is_err():
                return

    def __aiter__(self) -> AsyncIterator[Result[PageView]]:
        return self.results()
