"""Owned domain records (Pydantic v2).

These models hold independent copies of everything they carry and may be kept
for as long as the caller likes. Their borrowed counterparts live in
`ngrams.core.domain.views`.

Notes:
- JSON keys are camelCase; attributes are snake_case. Both are accepted on
  input, `model_dump(by_alias=True)` writes camelCase back.
- Relative counts are derived by division on the server, so equality on the
  records that carry them uses a tolerance instead of `==`.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

if TYPE_CHECKING:
    from ngrams.core.domain.views import PageView

TOTAL_COUNTS_BY_YEAR_LEN = 550
NUM_BUCKETS = 5

_REL_TOL = 1e-9
_ABS_TOL = 1e-12


# Constraints shared by the owned models and the view decoder.
NgramId = Annotated[str, Field(min_length=1)]
MatchCount = Annotated[int, Field(ge=0)]
RelativeCount = Annotated[float, Field(ge=0.0)]


def counts_close(a: float, b: float) -> bool:
    """Compare two relative match counts with a small tolerance."""

    return math.isclose(a, b, rel_tol=_REL_TOL, abs_tol=_ABS_TOL)


class QueryTokenKind(str, Enum):
    TERM = "TERM"
    STAR = "STAR"
    STARSTAR = "STARSTAR"
    STAR_ADJ = "STAR_ADJ"
    STAR_ADP = "STAR_ADP"
    STAR_ADV = "STAR_ADV"
    STAR_CONJ = "STAR_CONJ"
    STAR_DET = "STAR_DET"
    STAR_NOUN = "STAR_NOUN"
    STAR_NUM = "STAR_NUM"
    STAR_PRON = "STAR_PRON"
    STAR_PRT = "STAR_PRT"
    STAR_VERB = "STAR_VERB"
    SENTENCE_START = "SENTENCE_START"
    SENTENCE_END = "SENTENCE_END"
    SLASH = "SLASH"
    PREFIX = "PREFIX"
    TERM_GROUP = "TERM_GROUP"


class NgramTokenKind(str, Enum):
    TERM = "TERM"
    TAGGED_AS_ADJ = "TAGGED_AS_ADJ"
    TAGGED_AS_ADP = "TAGGED_AS_ADP"
    TAGGED_AS_ADV = "TAGGED_AS_ADV"
    TAGGED_AS_CONJ = "TAGGED_AS_CONJ"
    TAGGED_AS_DET = "TAGGED_AS_DET"
    TAGGED_AS_NOUN = "TAGGED_AS_NOUN"
    TAGGED_AS_NUM = "TAGGED_AS_NUM"
    TAGGED_AS_PRON = "TAGGED_AS_PRON"
    TAGGED_AS_PRT = "TAGGED_AS_PRT"
    TAGGED_AS_VERB = "TAGGED_AS_VERB"
    SENTENCE_START = "SENTENCE_START"
    SENTENCE_END = "SENTENCE_END"


class ApiModel(BaseModel):
    """Base for every record decoded from the API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class QueryToken(ApiModel):
    """One token of the query as the server understood it."""

    kind: QueryTokenKind = Field(..., description="Token kind (term, wildcard, boundary, ...).")
    text: str = Field(..., description="Token text as written in the query.")


class NgramToken(ApiModel):
    """One token of a matched n-gram."""

    kind: NgramTokenKind = Field(..., description="Literal term, POS tag marker or sentence boundary.")
    text: str = Field(..., description="Token text.")
    inserted: bool = Field(
        default=False,
        description="Token synthesized by the server, not present in the query.",
    )
    completed: bool = Field(
        default=False,
        description="Prefix token completed by the server.",
    )


class NgramLite(ApiModel):
    """N-gram as returned in search pages (no per-year statistics)."""

    id: NgramId
    abs_total_match_count: MatchCount
    rel_total_match_count: RelativeCount
    tokens: list[NgramToken]
    abstract: bool = Field(
        default=False,
        description="True when the record is an abstract pattern rather than a literal n-gram.",
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NgramLite):
            return NotImplemented
        return (
            self.id == other.id
            and self.abs_total_match_count == other.abs_total_match_count
            and counts_close(self.rel_total_match_count, other.rel_total_match_count)
            and self.tokens == other.tokens
            and self.abstract == other.abstract
        )

    def text(self) -> str:
        return " ".join(t.text for t in self.tokens)


class NgramStat(ApiModel):
    year: int
    abs_match_count: MatchCount
    rel_match_count: RelativeCount

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NgramStat):
            return NotImplemented
        return (
            self.year == other.year
            and self.abs_match_count == other.abs_match_count
            and counts_close(self.rel_match_count, other.rel_match_count)
        )


class Ngram(ApiModel):
    """N-gram with its year-by-year statistics (lookup by id)."""

    id: NgramId
    abs_total_match_count: MatchCount
    rel_total_match_count: RelativeCount
    tokens: list[NgramToken]
    abstract: bool = False
    stats: list[NgramStat] = Field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ngram):
            return NotImplemented
        return (
            self.id == other.id
            and self.abs_total_match_count == other.abs_total_match_count
            and counts_close(self.rel_total_match_count, other.rel_total_match_count)
            and self.tokens == other.tokens
            and self.abstract == other.abstract
            and self.stats == other.stats
        )

    def stat_for(self, year: int) -> NgramStat | None:
        for stat in self.stats:
            if stat.year == year:
                return stat
        return None


class Page(ApiModel):
    """Owned search page: query tokens plus matched n-grams."""

    query_tokens: list[QueryToken]
    ngrams: list[NgramLite]

    @classmethod
    def from_json(cls, text: str | bytes) -> "Page":
        """Decode a search body straight into owned records."""

        return cls.model_validate_json(text)

    def to_view(self) -> "PageView":
        """Borrowed view over a private buffer holding this page."""

        from ngrams.core.domain.views import ResponseBuffer  # noqa: PLC0415

        return ResponseBuffer.from_text(self.to_json()).page_view()


class CorpusStat(ApiModel):
    """Statistics of one n-gram length bucket of a corpus."""

    num_ngrams: int = Field(..., ge=0)
    min_year: int
    max_year: int
    min_match_count: int = Field(..., ge=0)
    max_match_count: int = Field(..., ge=0)
    min_total_match_count: int = Field(..., ge=0)
    max_total_match_count: int = Field(..., ge=0)


class CorpusInfo(ApiModel):
    name: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    stats: list[CorpusStat] = Field(..., min_length=NUM_BUCKETS, max_length=NUM_BUCKETS)


TotalCountsByYear = Annotated[list[Annotated[int, Field(ge=0)]], Field(description="One count per year.")]


class TotalCounts(ApiModel):
    """Corpus-wide match counts per year, one array per n-gram length (1..5).

    Index `i` of each array is year `min_year + i`.
    """

    min_year: int
    max_year: int
    match_counts: list[TotalCountsByYear] = Field(..., min_length=NUM_BUCKETS, max_length=NUM_BUCKETS)

    @field_validator("match_counts")
    @classmethod
    def _check_bucket_lengths(cls, value: list[list[int]]) -> list[list[int]]:
        for bucket, counts in enumerate(value, start=1):
            if len(counts) != TOTAL_COUNTS_BY_YEAR_LEN:
                raise ValueError(
                    f"invalid length {len(counts)} for bucket {bucket}, "
                    f"expected {TOTAL_COUNTS_BY_YEAR_LEN}"
                )
        return value

    def for_ngram_length(self, n: int) -> list[int]:
        if not 1 <= n <= NUM_BUCKETS:
            raise ValueError(f"n must be in 1..{NUM_BUCKETS}, got {n}")
        return self.match_counts[n - 1]

    def match_count(self, year: int, n: int = 1) -> int:
        """Total match count of all `n`-grams in `year` (0 outside the array)."""

        counts = self.for_ngram_length(n)
        index = year - self.min_year
        if 0 <= index < len(counts):
            return counts[index]
        return 0
