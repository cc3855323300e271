"""
Edge case tests for clipfzf.

Tests cover:
- Unicode case folding that changes string length
- Non-Latin scripts and emoji
- Whitespace and separators in texts and queries
- Very long texts (100K+ chars)
- Adversarial inputs (repeated patterns)
"""

import pytest

import clipfzf as cf
from clipfzf import NO_SCORE
from fixtures.real_data import INTERNATIONAL_TEXTS


class TestUnicodeFolding:
    """Case folding is done per character, so positions never shift."""

    def test_dotted_capital_i(self):
        """'İ'.lower() is two code points; scores still line up with the text."""
        scores = cf.score_text("İstanbul", "stan")
        assert len(scores) == len("İstanbul")
        assert scores[4] == 40
        assert cf.best_score(scores) == 40

    def test_greek_sigma(self):
        assert cf.score_text("ΣΑΣ", "σ") == [15, NO_SCORE, 10]

    def test_sharp_s_is_not_expanded(self):
        assert not cf.is_match(cf.fzf_score("straße", "ss"))
        assert cf.fzf_score("straße", "ß") == 10

    def test_accented_case_insensitive(self):
        assert cf.fzf_score("Élan", "é") == 15

    @pytest.mark.parametrize("text", INTERNATIONAL_TEXTS)
    def test_self_match(self, text):
        assert cf.fzf_score(text, text) >= len(text) * cf.MATCH_SCORE

    @pytest.mark.parametrize("text", INTERNATIONAL_TEXTS)
    def test_vector_length(self, text):
        assert len(cf.score_text(text, text[:1])) == len(text)


class TestScripts:
    """Non-Latin text."""

    def test_japanese(self):
        assert cf.fzf_score("日本語テキスト", "テキ") == 20

    def test_emoji_then_boundary(self):
        assert cf.fzf_score("🎉 party", "p") == 13

    def test_emoji_query(self):
        assert cf.fzf_score("🎉 party", "🎉") == 15

    def test_zero_width_joiner(self):
        text = "👨‍👩‍👧 family"
        assert cf.is_match(cf.fzf_score(text, "fam"))


class TestWhitespace:
    """Whitespace handling."""

    def test_tab_is_not_a_separator(self):
        assert cf.compute_bonus("a\tb") == [5, 0, 0]

    def test_separator_query(self):
        assert cf.score_text("a/b", "/") == [NO_SCORE, 10, NO_SCORE]

    def test_only_spaces(self):
        assert cf.score_text("   ", "  ") == [NO_SCORE, 28, 26]

    def test_multiline_entry(self):
        text = "def main():\n    return 0\n"
        assert cf.is_match(cf.fzf_score(text, "main ret"))


class TestLongTexts:
    """Very long inputs."""

    def test_long_text_no_match_exits_early(self):
        text = "x" * 100_000
        assert cf.score_text(text, "yx") == [NO_SCORE] * len(text)

    @pytest.mark.slow
    def test_long_text_match(self):
        text = "a" + "x" * 100_000 + "b"
        score = cf.fzf_score(text, "ab")
        assert score == 15 + cf.GAP_SCORE * 100_000 + cf.MATCH_SCORE
        assert cf.is_match(score)

    @pytest.mark.slow
    def test_long_query(self):
        text = "ab" * 2_000
        query = "ab" * 1_000
        assert cf.is_match(cf.fzf_score(text, query))


class TestAdversarialInputs:
    """Repeated patterns."""

    def test_repeated_char(self):
        scores = cf.score_text("aaaa", "aa")
        assert scores == [NO_SCORE, 25, 23, 21]

    def test_query_longer_than_text_of_same_char(self):
        assert cf.score_text("aaa", "aaaa") == [NO_SCORE] * 3

    def test_regex_metacharacters_are_literal(self):
        assert cf.fzf_score("a.*b", ".*") == 23
        assert not cf.is_match(cf.fzf_score("ab", ".*"))
