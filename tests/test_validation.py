"""
Parameter validation tests for clipfzf.

Tests cover:
- The exception hierarchy
- limit / min_score validation
- Type validation (non-string inputs)
- Enum parameter normalization
"""

import pytest

import clipfzf as cf
from clipfzf import ClipboardEntry, ClipboardIndex


class TestExceptionHierarchy:
    """Custom exceptions share one base class."""

    def test_validation_error_is_value_error(self):
        assert issubclass(cf.ValidationError, cf.ClipFzfError)
        assert issubclass(cf.ValidationError, ValueError)

    def test_index_error(self):
        assert issubclass(cf.ClipIndexError, cf.ClipFzfError)
        assert not issubclass(cf.ClipIndexError, ValueError)


class TestParameterValidation:
    """Tests for parameter boundary validation."""

    def test_negative_limit(self):
        with pytest.raises(cf.ValidationError, match="non-negative"):
            cf.find_best_matches(["a"], "a", limit=-1)

    def test_float_limit(self):
        with pytest.raises(cf.ValidationError):
            cf.find_best_matches(["a"], "a", limit=1.5)

    def test_bool_limit(self):
        with pytest.raises(cf.ValidationError):
            cf.find_best_matches(["a"], "a", limit=True)

    def test_float_min_score(self):
        with pytest.raises(cf.ValidationError):
            cf.find_best_matches(["a"], "a", min_score=0.5)

    def test_negative_min_score_is_allowed(self):
        assert len(cf.find_best_matches(["a"], "a", min_score=-100)) == 1

    def test_validation_error_caught_as_value_error(self):
        with pytest.raises(ValueError):
            cf.extract("a", ["a"], limit=-5)

    def test_index_search_limit(self):
        with pytest.raises(cf.ValidationError):
            ClipboardIndex().search("a", limit=-1)

    def test_index_recent_limit(self):
        with pytest.raises(cf.ValidationError):
            ClipboardIndex().recent(limit="3")

    def test_rank_series_limit(self):
        import polars as pl

        with pytest.raises(cf.ValidationError):
            cf.rank_series(pl.Series(["a"]), "a", limit=-1)


class TestTypeValidation:
    """Non-string inputs raise TypeError."""

    def test_score_text_int(self):
        with pytest.raises(TypeError, match="text must be str"):
            cf.score_text(123, "a")

    def test_fzf_score_none_query(self):
        with pytest.raises(TypeError, match="query must be str"):
            cf.fzf_score("abc", None)

    def test_find_best_matches_non_str_item(self):
        with pytest.raises(TypeError):
            cf.find_best_matches(["a", 1], "a")

    def test_find_best_matches_non_str_query(self):
        with pytest.raises(TypeError):
            cf.find_best_matches(["a"], 1)

    def test_entry_content(self):
        with pytest.raises(TypeError):
            ClipboardEntry(None, "2024-01-01T00:00:00Z")


class TestEnumNormalization:
    """String and enum forms are interchangeable."""

    @pytest.mark.parametrize(
        "value", ["neutral", "NEUTRAL", "Neutral", cf.EmptyQueryPolicy.NEUTRAL]
    )
    def test_empty_query_policy(self, value):
        assert len(cf.find_best_matches(["a"], "", empty_query=value)) == 1

    @pytest.mark.parametrize("value", ["insertion", "INSERTION", cf.TieBreak.INSERTION])
    def test_tie_break(self, value):
        index = ClipboardIndex(
            [
                ClipboardEntry("a", "2024-01-01T00:00:00Z"),
                ClipboardEntry("a", "2024-01-02T00:00:00Z"),
            ]
        )
        assert [r.id for r in index.search("a", tie_break=value)] == [1, 2]

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            cf.find_best_matches(["a"], "", empty_query=1)

    def test_unknown_name_lists_options(self):
        with pytest.raises(cf.ValidationError, match="neutral"):
            cf.find_best_matches(["a"], "", empty_query="everything")

    def test_enums_compare_to_strings(self):
        assert cf.EntryKind.IMAGE == "image"
        assert cf.TieBreak.RECENCY == "recency"
