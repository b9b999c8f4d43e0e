"""Corpora served by the API.

Each corpus maps to a fixed three-letter path segment. The set is closed:
adding a corpus means adding a member here.
"""

from __future__ import annotations

from enum import Enum


class Corpus(str, Enum):
    """Searchable text collections."""

    ENGLISH = "eng"
    GERMAN = "ger"
    RUSSIAN = "rus"

    @classmethod
    def default(cls) -> "Corpus":
        """Return the corpus used when the caller does not pick one."""

        return cls.ENGLISH

    @classmethod
    def from_label(cls, label: str) -> "Corpus":
        """Resolve a path label such as `"ger"` (case-insensitive)."""

        try:
            return cls(label.strip().lower())
        except ValueError:
            known = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown corpus label {label!r} (expected one of: {known}).") from None

    def label(self) -> str:
        """Path segment used in request URLs."""

        return self.value
