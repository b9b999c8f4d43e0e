"""Borrowed views over a raw search response.

A search body is parsed and validated once into a JSON tree stored in a
`ResponseBuffer`, under the same constraints as the owned models.
Views read their fields straight from the nodes of that tree: no record
objects are built and no text is copied until the caller asks for an owned
copy (`to_page()`, `to_ngram_lite()`, ...).

Lifetime rule:
- A buffer is replaced by the cursor on every successful fetch. Each
  replacement bumps `generation`, and a view created for an older generation
  raises `StaleViewError` on access. Convert to owned records to keep data
  across fetches.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Annotated, Any, Iterator, Union

from pydantic import Discriminator, Tag, TypeAdapter, ValidationError
from typing_extensions import NotRequired, TypedDict

from ngrams.core.domain.errors import BadInput, ErrorCode, ParseFailure
from ngrams.core.domain.models import (
    MatchCount,
    NgramId,
    NgramLite,
    NgramToken,
    NgramTokenKind,
    Page,
    QueryToken,
    QueryTokenKind,
    RelativeCount,
)


class StaleViewError(RuntimeError):
    """A view was used after its buffer had been replaced."""


class ResponseBuffer:
    """Owns the raw body of the current page and its decoded tree."""

    __slots__ = ("_text", "_tree", "_generation")

    def __init__(self) -> None:
        self._text = ""
        self._tree: dict[str, Any] = {"queryTokens": [], "ngrams": []}
        self._generation = 0

    @classmethod
    def from_text(cls, text: str) -> "ResponseBuffer":
        """Buffer holding a single success body (raises `ParseFailure` otherwise)."""

        outcome = decode_search_body(text)
        if isinstance(outcome, SearchRejection):
            raise ParseFailure("expected a search page, got an error object")
        buffer = cls()
        buffer.replace(text, outcome.tree)
        return buffer

    @property
    def text(self) -> str:
        return self._text

    @property
    def generation(self) -> int:
        return self._generation

    def replace(self, text: str, tree: dict[str, Any]) -> None:
        self._text = text
        self._tree = tree
        self._generation += 1

    def page_view(self) -> "PageView":
        return PageView(self, self._generation, self._tree)


class _View:
    __slots__ = ("_buffer", "_generation", "_node")

    def __init__(self, buffer: ResponseBuffer, generation: int, node: dict[str, Any]) -> None:
        self._buffer = buffer
        self._generation = generation
        self._node = node

    @property
    def is_valid(self) -> bool:
        return self._buffer.generation == self._generation

    def _field(self, key: str, default: Any = None) -> Any:
        if self._buffer.generation != self._generation:
            raise StaleViewError(
                f"{type(self).__name__} belongs to a page that has been replaced; "
                "convert it to an owned record before fetching the next page"
            )
        return self._node.get(key, default)

    def _child(self, cls: type, node: dict[str, Any]) -> Any:
        return cls(self._buffer, self._generation, node)

    def to_owned(self) -> Any:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_owned() == other.to_owned()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self.is_valid:
            return f"<stale {type(self).__name__}>"
        return f"{type(self).__name__}({self._node!r})"


class QueryTokenView(_View):
    __slots__ = ()

    @property
    def kind(self) -> QueryTokenKind:
        return QueryTokenKind(self._field("kind"))

    @property
    def text(self) -> str:
        return self._field("text")

    def to_query_token(self) -> QueryToken:
        return QueryToken(kind=self.kind, text=self.text)

    to_owned = to_query_token


class NgramTokenView(_View):
    __slots__ = ()

    @property
    def kind(self) -> NgramTokenKind:
        return NgramTokenKind(self._field("kind"))

    @property
    def text(self) -> str:
        return self._field("text")

    @property
    def inserted(self) -> bool:
        return self._field("inserted", False)

    @property
    def completed(self) -> bool:
        return self._field("completed", False)

    def to_ngram_token(self) -> NgramToken:
        return NgramToken(
            kind=self.kind,
            text=self.text,
            inserted=self.inserted,
            completed=self.completed,
        )

    to_owned = to_ngram_token


class NgramLiteView(_View):
    __slots__ = ()

    @property
    def id(self) -> str:
        return self._field("id")

    @property
    def abs_total_match_count(self) -> int:
        return self._field("absTotalMatchCount")

    @property
    def rel_total_match_count(self) -> float:
        return float(self._field("relTotalMatchCount"))

    @property
    def tokens(self) -> list[NgramTokenView]:
        return [self._child(NgramTokenView, node) for node in self._field("tokens")]

    @property
    def abstract(self) -> bool:
        return self._field("abstract", False)

    def text(self) -> str:
        return " ".join(node["text"] for node in self._field("tokens"))

    def to_ngram_lite(self) -> NgramLite:
        return NgramLite(
            id=self.id,
            abs_total_match_count=self.abs_total_match_count,
            rel_total_match_count=self.rel_total_match_count,
            tokens=[t.to_ngram_token() for t in self.tokens],
            abstract=self.abstract,
        )

    to_owned = to_ngram_lite


class PageView(_View):
    """One page of search results, borrowed from the cursor's buffer."""

    __slots__ = ()

    @property
    def query_tokens(self) -> list[QueryTokenView]:
        return [self._child(QueryTokenView, node) for node in self._field("queryTokens")]

    @property
    def ngrams(self) -> list[NgramLiteView]:
        return [self._child(NgramLiteView, node) for node in self._field("ngrams")]

    def __len__(self) -> int:
        return len(self._field("ngrams"))

    def __iter__(self) -> Iterator[NgramLiteView]:
        return iter(self.ngrams)

    def to_page(self) -> Page:
        return Page(
            query_tokens=[t.to_query_token() for t in self.query_tokens],
            ngrams=[n.to_ngram_lite() for n in self.ngrams],
        )

    to_owned = to_page


@dataclass(frozen=True)
class SearchSuccess:
    tree: dict[str, Any]
    next_page_token: str | None


@dataclass(frozen=True)
class SearchRejection:
    code: ErrorCode
    query_tokens: list[QueryToken] | None
    context: str | None = None

    def to_error(self) -> BadInput:
        return BadInput(self.code, self.query_tokens, self.context)


SearchOutcome = SearchSuccess | SearchRejection


# Wire shapes of the search body. Field constraints come from the owned
# models, so a body accepted here always converts to owned records.


class _QueryTokenNode(TypedDict):
    kind: QueryTokenKind
    text: str


class _NgramTokenNode(TypedDict):
    kind: NgramTokenKind
    text: str
    inserted: NotRequired[bool]
    completed: NotRequired[bool]


class _NgramNode(TypedDict):
    id: NgramId
    absTotalMatchCount: MatchCount
    relTotalMatchCount: RelativeCount
    tokens: list[_NgramTokenNode]
    abstract: NotRequired[bool]


class _PageNode(TypedDict):
    queryTokens: list[_QueryTokenNode]
    ngrams: list[_NgramNode]
    nextPageToken: NotRequired[str | None]


class _ErrorDetailNode(TypedDict):
    code: ErrorCode
    context: NotRequired[Any]


class _ErrorNode(TypedDict):
    error: _ErrorDetailNode
    queryTokens: NotRequired[list[_QueryTokenNode] | None]


def _body_tag(value: Any) -> str:
    if isinstance(value, dict) and "error" in value:
        return "error"
    return "page"


_SEARCH_BODY: TypeAdapter[Any] = TypeAdapter(
    Annotated[
        Union[Annotated[_PageNode, Tag("page")], Annotated[_ErrorNode, Tag("error")]],
        Discriminator(_body_tag),
    ]
)


def decode_search_body(text: str | bytes) -> SearchOutcome:
    """Decode a search response body into a success or a rejection.

    The presence of an `error` key decides which shape is expected. Any
    deviation from that shape raises `ParseFailure`.
    """

    try:
        tree = _SEARCH_BODY.validate_json(text)
    except ValidationError as exc:
        raise ParseFailure.from_validation_error(exc) from exc

    if "error" in tree:
        return _rejection(tree)
    return SearchSuccess(tree=tree, next_page_token=tree.get("nextPageToken"))


def _rejection(tree: dict[str, Any]) -> SearchRejection:
    error = tree["error"]
    context = error.get("context")
    if context is not None and not isinstance(context, str):
        context = json.dumps(context)

    raw_tokens = tree.get("queryTokens")
    query_tokens = None
    if raw_tokens is not None:
        query_tokens = [QueryToken(kind=node["kind"], text=node["text"]) for node in raw_tokens]
    return SearchRejection(code=error["code"], query_tokens=query_tokens, context=context)
