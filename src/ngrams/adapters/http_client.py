"""httpx wrapper.

Responsibility:
- Standardizes base URL and timeout for every request sent to the API.
- `RequestIssuer` sets the User-Agent header on each request, so a
  caller-supplied `httpx.AsyncClient` identifies itself the same way.
- Can be handed a ready-made `httpx.AsyncClient` (tests use one backed by
  `httpx.MockTransport`).
"""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ngrams.core.config import ClientSettings
from ngrams.core.domain.corpus import Corpus

logger = logging.getLogger(__name__)


def build_async_client(
    settings: ClientSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the client's defaults."""

    settings = settings or ClientSettings()
    headers: dict[str, str] = {"Accept": "application/json"}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class RequestIssuer:
    """Builds and sends GET requests for a corpus/resource pair.

    Safe to share between concurrent cursors: it holds no per-request state.
    """

    def __init__(self, client: httpx.AsyncClient, settings: ClientSettings | None = None) -> None:
        self._client = client
        self._settings = settings or ClientSettings()

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def url(self, corpus: Corpus, resource: str) -> str:
        return self._settings.endpoint(corpus.label(), resource)

    async def get(
        self,
        corpus: Corpus,
        resource: str,
        params: Sequence[tuple[str, str]] | None = None,
    ) -> httpx.Response:
        url = self.url(corpus, resource)
        logger.debug(
            "GET %s params=%s",
            url,
            [key for key, _ in params] if params else [],
        )
        return await self._client.get(
            url,
            params=list(params) if params else None,
            headers={"User-Agent": self._settings.user_agent},
        )
