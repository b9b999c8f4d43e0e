"""Search options and their encoding into request parameters.

The API expects a flat parameter list: `query`, `limit`, `flags` and `start`.
Boolean modifiers travel as a compact flag string made of two-letter codes.
"""

from __future__ import annotations

from dataclasses import dataclass

# Declared order is the wire order.
_FLAG_CODES: tuple[tuple[str, str], ...] = (
    ("case_sensitive", "cs"),
    ("collapse_result", "cr"),
    ("exclude_punctuation_marks", "ep"),
    ("exclude_sentence_boundary_tags", "es"),
    ("dont_interpret_query_operators", "ri"),
    ("dont_tokenize_query_terms", "rt"),
    ("dont_unicode_normalize_query", "rn"),
)


@dataclass
class SearchOptions:
    """Options for a paginated search.

    `max_page_size` is forwarded as `limit` without local validation; the
    server accepts 1..100 and rejects anything else. `max_page_count` is the
    number of pages a cursor may fetch; 0 means no request at all.
    """

    max_page_size: int = 100
    max_page_count: int = 10
    case_sensitive: bool = False
    collapse_result: bool = False
    exclude_punctuation_marks: bool = False
    exclude_sentence_boundary_tags: bool = False
    dont_interpret_query_operators: bool = False
    dont_tokenize_query_terms: bool = False
    dont_unicode_normalize_query: bool = False

    def __post_init__(self) -> None:
        if self.max_page_count < 0:
            raise ValueError("max_page_count must be >= 0")

    def to_flags(self) -> str:
        """Concatenate the codes of all active modifiers ('' when none)."""

        return "".join(code for attr, code in _FLAG_CODES if getattr(self, attr))

    def to_params(self, query: str, start: str | None = None) -> list[tuple[str, str]]:
        params = [("query", query), ("limit", str(self.max_page_size))]
        flags = self.to_flags()
        if flags:
            params.append(("flags", flags))
        if start is not None:
            params.append(("start", start))
        return params
