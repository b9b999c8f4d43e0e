"""ngrams - async Python client for the ngrams.dev search API.

Usage:
    from ngrams import Client, Corpus, SearchOptions

    async with Client() as client:
        pages = client.search("hello * *", Corpus.ENGLISH, SearchOptions(max_page_count=3))
        async for result in pages:
            if result.is_err():
                print(result.error)
                break
            for ngram in result.value.ngrams:
                print(ngram.text(), ngram.abs_total_match_count)
"""

__version__ = "0.1.0"

from ngrams.adapters.api_client import Client
from ngrams.core.config import ClientSettings
from ngrams.core.domain.corpus import Corpus
from ngrams.core.domain.errors import (
    BadInput,
    ConnectionFailure,
    Err,
    ErrorCode,
    ErrorKind,
    NgramsError,
    Ok,
    ParseFailure,
    Result,
    UnexpectedStatus,
)
from ngrams.core.domain.models import (
    TOTAL_COUNTS_BY_YEAR_LEN,
    CorpusInfo,
    CorpusStat,
    Ngram,
    NgramLite,
    NgramStat,
    NgramToken,
    NgramTokenKind,
    Page,
    QueryToken,
    QueryTokenKind,
    TotalCounts,
)
from ngrams.core.domain.options import SearchOptions
from ngrams.core.domain.views import (
    NgramLiteView,
    NgramTokenView,
    PageView,
    QueryTokenView,
    StaleViewError,
)
from ngrams.core.services.pagination import Pages

__all__ = [
    "BadInput",
    "Client",
    "ClientSettings",
    "ConnectionFailure",
    "Corpus",
    "CorpusInfo",
    "CorpusStat",
    "Err",
    "ErrorCode",
    "ErrorKind",
    "Ngram",
    "NgramLite",
    "NgramLiteView",
    "NgramStat",
    "NgramToken",
    "NgramTokenKind",
    "NgramTokenView",
    "NgramsError",
    "Ok",
    "Page",
    "PageView",
    "Pages",
    "ParseFailure",
    "QueryToken",
    "QueryTokenKind",
    "QueryTokenView",
    "Result",
    "SearchOptions",
    "StaleViewError",
    "TOTAL_COUNTS_BY_YEAR_LEN",
    "TotalCounts",
    "UnexpectedStatus",
]
