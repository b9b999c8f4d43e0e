"""
Unit tests for search options, flag encoding and corpus labels.
"""
import pytest

from ngrams import Corpus, SearchOptions


class TestFlags:
    def test_all_false_is_empty(self):
        assert SearchOptions().to_flags() == ""

    def test_single_flag(self):
        assert SearchOptions(collapse_result=True).to_flags() == "cr"

    def test_all_flags_in_declared_order(self):
        options = SearchOptions(
            dont_unicode_normalize_query=True,
            dont_tokenize_query_terms=True,
            dont_interpret_query_operators=True,
            exclude_sentence_boundary_tags=True,
            exclude_punctuation_marks=True,
            collapse_result=True,
            case_sensitive=True,
        )
        assert options.to_flags() == "cscrepesrirtrn"

    def test_subset_keeps_order(self):
        options = SearchOptions(dont_unicode_normalize_query=True, case_sensitive=True)
        assert options.to_flags() == "csrn"


class TestParams:
    def test_defaults(self):
        assert SearchOptions().to_params("hello * *") == [
            ("query", "hello * *"),
            ("limit", "100"),
        ]

    def test_flags_and_start(self):
        options = SearchOptions(max_page_size=25, exclude_punctuation_marks=True)
        assert options.to_params("a b", start="tok-1") == [
            ("query", "a b"),
            ("limit", "25"),
            ("flags", "ep"),
            ("start", "tok-1"),
        ]

    def test_limit_is_not_validated_locally(self):
        assert ("limit", "101") in SearchOptions(max_page_size=101).to_params("x")

    def test_negative_page_count_rejected(self):
        with pytest.raises(ValueError):
            SearchOptions(max_page_count=-1)


class TestCorpus:
    @pytest.mark.parametrize(
        "corpus,label",
        [(Corpus.ENGLISH, "eng"), (Corpus.GERMAN, "ger"), (Corpus.RUSSIAN, "rus")],
    )
    def test_labels(self, corpus, label):
        assert corpus.label() == label
        assert Corpus.from_label(label.upper()) is corpus

    def test_unknown_label(self):
        with pytest.raises(ValueError, match="fra"):
            Corpus.from_label("fra")

    def test_default(self):
        assert Corpus.default() is Corpus.ENGLISH
