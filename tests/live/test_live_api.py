"""
Live tests against the public API.

Skipped unless NGRAMS_LIVE_TESTS=1. Counts depend on the corpus snapshot
served at the time of writing.
"""
import os

import pytest

from ngrams import Client, Corpus, ErrorCode, ErrorKind, SearchOptions

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(os.environ.get("NGRAMS_LIVE_TESTS") != "1", reason="set NGRAMS_LIVE_TESTS=1"),
]


async def test_first_three_pages():
    async with Client() as client:
        pages = client.search("hello * *", Corpus.ENGLISH, SearchOptions(max_page_size=100, max_page_count=3))
        num_pages = 0
        num_ngrams = 0
        async for result in pages:
            page = result.unwrap()
            assert len(page.query_tokens) == 3
            assert len(page.ngrams) <= 100
            num_ngrams += len(page.ngrams)
            num_pages += 1
    assert num_pages == 3
    assert num_ngrams == 300


async def test_invalid_limit():
    async with Client() as client:
        result = await client.search("test", Corpus.ENGLISH, SearchOptions(max_page_size=101)).fetch_next()
    assert result.kind is ErrorKind.BAD_INPUT
    assert result.error.code is ErrorCode.INVALID_PARAMETER_LIMIT
    assert result.error.query_tokens is None


async def test_get_ngram():
    async with Client() as client:
        ngram = (await client.get_ngram(Corpus.ENGLISH, "f2036997e2ba2ab5ba39ecc6c8d5a19f")).unwrap()
    assert ngram is not None
    assert [t.text for t in ngram.tokens] == ["hello", "world"]


async def test_total_counts():
    async with Client() as client:
        counts = (await client.get_total_counts(Corpus.ENGLISH)).unwrap()
    assert counts.min_year == 1470
    assert counts.max_year == 2019
