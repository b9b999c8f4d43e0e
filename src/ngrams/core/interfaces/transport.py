"""Contract of the request issuer used by the cursor and the client.

Rules:
- `get` is asynchronous: it suspends on the network call only.
- It returns the raw `httpx.Response`; interpreting the status is the
  caller's job.
- Transport failures propagate as `httpx.HTTPError` subclasses.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import httpx

from ngrams.core.domain.corpus import Corpus


@runtime_checkable
class Transport(Protocol):
    async def get(
        self,
        corpus: Corpus,
        resource: str,
        params: Sequence[tuple[str, str]] | None = None,
    ) -> httpx.Response:
        """Send `GET {base}/{corpus}/{resource}` and return the full response."""

        ...
