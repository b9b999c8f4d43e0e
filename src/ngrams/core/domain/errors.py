"""Error taxonomy and the `Result` type returned by every fetch.

Every fallible call resolves to exactly one outcome:
- `Ok(value)` on success.
- `Err(error)` where `error` is one of four closed kinds: connection failure,
  parse failure, bad input (server-side rejection of the query) or an
  unexpected HTTP status.

Rejections are frequent and expected, so they are returned as values. The
error classes are still `Exception` subclasses: `Result.unwrap()` raises them
for callers that prefer exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from pydantic import ValidationError

from ngrams.core.domain.models import QueryToken

T = TypeVar("T")
D = TypeVar("D")


class ErrorKind(str, Enum):
    CONNECTION = "connection"
    PARSE = "parse"
    BAD_INPUT = "bad_input"
    UNEXPECTED_STATUS = "unexpected_status"


class ErrorCode(str, Enum):
    """Error codes a request can produce on the search endpoint."""

    INVALID_ENCODING = "INVALID_ENCODING"
    INVALID_PARAMETER_LIMIT = "INVALID_PARAMETER.LIMIT"
    INVALID_PARAMETER_START = "INVALID_PARAMETER.START"
    INVALID_QUERY_BAD_ALTERNATION = "INVALID_QUERY.BAD_ALTERNATION"
    INVALID_QUERY_BAD_COMPLETION = "INVALID_QUERY.BAD_COMPLETION"
    INVALID_QUERY_BAD_TERM_GROUP = "INVALID_QUERY.BAD_TERM_GROUP"
    INVALID_QUERY_NO_TERM = "INVALID_QUERY.NO_TERM"
    INVALID_QUERY_TOO_EXPENSIVE = "INVALID_QUERY.TOO_EXPENSIVE"
    INVALID_QUERY_TOO_MANY_TOKENS = "INVALID_QUERY.TOO_MANY_TOKENS"
    INVALID_REQUEST_BODY = "INVALID_REQUEST_BODY"
    MISSING_PARAMETER_QUERY = "MISSING_PARAMETER.QUERY"


class NgramsError(Exception):
    """Base class of the closed error set."""

    kind: ErrorKind

    def __init__(self, message: str, *, source: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        if source is not None:
            self.__cause__ = source

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ConnectionFailure(NgramsError):
    """The request never produced an HTTP response."""

    kind = ErrorKind.CONNECTION

    def __init__(self, source: BaseException) -> None:
        super().__init__(f"connection error: {source}", source=source)


class ParseFailure(NgramsError):
    """The response body did not have the expected shape."""

    kind = ErrorKind.PARSE

    def __init__(self, message: str, *, source: BaseException | None = None) -> None:
        super().__init__(f"invalid response: {message}", source=source)
        self.reason = message

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "ParseFailure":
        parts = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()))
            parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
        return cls("; ".join(parts) or str(exc), source=exc)


class BadInput(NgramsError):
    """The server validated the request and rejected it."""

    kind = ErrorKind.BAD_INPUT

    def __init__(
        self,
        code: ErrorCode,
        query_tokens: list[QueryToken] | None = None,
        context: str | None = None,
    ) -> None:
        super().__init__(f"bad input: {code.value}")
        self.code = code
        self.query_tokens = query_tokens
        self.context = context

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BadInput):
            return NotImplemented
        return self.code == other.code and self.query_tokens == other.query_tokens

    __hash__ = None  # type: ignore[assignment]


class UnexpectedStatus(NgramsError):
    kind = ErrorKind.UNEXPECTED_STATUS

    def __init__(self, status_code: int) -> None:
        super().__init__(f"unexpected http status code: {status_code}")
        self.status_code = status_code


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: D) -> T | D:
        return self.value


@dataclass(frozen=True)
class Err:
    error: NgramsError

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self):
        raise self.error

    def unwrap_or(self, default: D) -> D:
        return default


Result = Union[Ok[T], Err]
