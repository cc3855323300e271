"""Positional fuzzy subsequence scorer.

Every public function here is pure: it reads its arguments and returns
freshly allocated lists, so it is safe to call from many threads at once.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

from clipfzf._exceptions import ValidationError
from clipfzf._utils import normalize_empty_query_policy
from clipfzf.enums import EmptyQueryPolicy

# Bonus for a match on the very first character of the text
INITIAL_SCORE = 5
# Bonus for a match right after a separator ("/", "_", "-", ".", " ")
BOUNDARY_SCORE = 3
# Bonus for a match on a lower -> upper case transition
CAMEL_CASE_SCORE = 2
# Reward for every matched query character
MATCH_SCORE = 10
# Penalty for every text character skipped between two matches
GAP_SCORE = -2

# Marks "no match ends here". Real scores never fall below
# MATCH_SCORE + GAP_SCORE * len(text).
NO_SCORE = -(2**31)

SEPARATORS = frozenset("/_-. ")


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class MatchResult:
    """
    Result from find_best_matches and batch operations.

    Attributes:
        text: The candidate text
        score: Best score of the query against the text (NO_SCORE if no match)
        id: Position of the text in the input list
    """

    text: str
    score: int
    id: Optional[int] = None


# =============================================================================
# Scoring
# =============================================================================


def _check_str(value, name: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")


def compute_bonus(text: str) -> list[int]:
    """
    Compute the positional bonus of every character in ``text``.

    Args:
        text: Candidate text

    Returns:
        List of bonuses, one per character.

    Example:
        >>> compute_bonus("my_fileName")
        [5, 0, 0, 3, 0, 0, 0, 2, 0, 0, 0]
    """
    _check_str(text, "text")
    bonus = [0] * len(text)
    prev_char = ""
    for i, char in enumerate(text):
        if i == 0:
            bonus[i] = INITIAL_SCORE
        elif prev_char in SEPARATORS:
            bonus[i] = BOUNDARY_SCORE
        elif prev_char.islower() and char.isupper():
            bonus[i] = CAMEL_CASE_SCORE
        prev_char = char
    return bonus


def score_text(text: str, query: str, bonus: Optional[Sequence[int]] = None) -> list[int]:
    """
    Score every position of ``text`` against ``query``.

    ``result[j]`` is the best score of an alignment of the whole query
    whose last character matches ``text[j]``, or NO_SCORE when no such
    alignment exists. Matching is case-insensitive.

    An empty query matches everywhere with a neutral score of 0.

    Args:
        text: Candidate text
        query: Query typed by the user
        bonus: Precomputed ``compute_bonus(text)``, for callers that cache it

    Returns:
        List of scores with the same length as ``text``.

    Raises:
        TypeError: If text or query is not a string.
        ValidationError: If bonus does not have the same length as text.

    Example:
        >>> score_text("ace", "ce")
        [-2147483648, -2147483648, 20]
        >>> score_text("abc", "")
        [0, 0, 0]
    """
    _check_str(text, "text")
    _check_str(query, "query")
    if bonus is None:
        bonus = compute_bonus(text)
    elif len(bonus) != len(text):
        raise ValidationError(
            f"bonus has length {len(bonus)}, expected {len(text)} (one per character)"
        )

    length = len(text)
    if not query:
        return [0] * length

    # Fold per character so positions stay aligned with text
    folded_text = [char.lower() for char in text]
    prev_row = [NO_SCORE] * length

    for i, q_char in enumerate(query):
        q_char = q_char.lower()
        row = [NO_SCORE] * length
        best = NO_SCORE
        for j, t_char in enumerate(folded_text):
            if i == 0:
                best = 0
            else:
                if best > NO_SCORE:
                    best += GAP_SCORE
                if j > 0 and prev_row[j - 1] > best:
                    best = prev_row[j - 1]
            if best > NO_SCORE and q_char == t_char:
                row[j] = best + bonus[j] + MATCH_SCORE
        if not any(score > NO_SCORE for score in row):
            # Nothing left to extend; later rows stay empty as well
            return row
        prev_row = row

    return prev_row


def best_score(scores: Sequence[int]) -> int:
    """Reduce a score vector to its best value (NO_SCORE if nothing matched)."""
    return max(scores, default=NO_SCORE)


def is_match(score: int) -> bool:
    """Return True if ``score`` comes from an actual match."""
    return score > NO_SCORE


def fzf_score(text: str, query: str) -> int:
    """
    Best score of ``query`` against ``text``.

    Example:
        >>> fzf_score("helloWorld", "hW")
        19
        >>> is_match(fzf_score("hello", "xyz"))
        False
    """
    return best_score(score_text(text, query))


# =============================================================================
# Ranking
# =============================================================================


def _validate_rank_args(limit: Optional[int], min_score: Optional[int]) -> None:
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int)):
        raise ValidationError(f"limit must be an int or None, got {type(limit).__name__}")
    if limit is not None and limit < 0:
        raise ValidationError(f"limit must be non-negative, got {limit}")
    if min_score is not None and (
        isinstance(min_score, bool) or not isinstance(min_score, int)
    ):
        raise ValidationError(
            f"min_score must be an int or None, got {type(min_score).__name__}"
        )


def _rank(
    results: list[MatchResult],
    limit: Optional[int],
    min_score: Optional[int],
) -> list[MatchResult]:
    """Drop non-matches and low scores, then sort best first (stable)."""
    kept = [
        r
        for r in results
        if is_match(r.score) and (min_score is None or r.score >= min_score)
    ]
    kept.sort(key=lambda r: r.score, reverse=True)
    if limit is not None:
        kept = kept[:limit]
    return kept


def _empty_query_results(
    strings: Sequence[str],
    policy: EmptyQueryPolicy,
    limit: Optional[int],
    min_score: Optional[int],
) -> list[MatchResult]:
    if policy is EmptyQueryPolicy.NO_MATCH:
        return []
    neutral = [MatchResult(text=s, score=0, id=i) for i, s in enumerate(strings)]
    return _rank(neutral, limit, min_score)


def find_best_matches(
    strings: Sequence[str],
    query: str,
    limit: Optional[int] = 10,
    min_score: Optional[int] = None,
    empty_query: Union[str, EmptyQueryPolicy] = "neutral",
) -> list[MatchResult]:
    """
    Rank strings by how well they match the query.

    Args:
        strings: Candidate texts
        query: Query typed by the user
        limit: Maximum number of results, None for all
        min_score: Drop matches scoring below this value
        empty_query: What an empty query returns: "neutral" (every string
            with score 0, in input order) or "no_match" (nothing)

    Returns:
        List of MatchResult sorted by score descending; ties keep input order.

    Example:
        >>> results = find_best_matches(["helloworld", "hello_world", "goodbye"], "hw")
        >>> [(r.text, r.score) for r in results]
        [('hello_world', 18), ('helloworld', 17)]
    """
    policy = normalize_empty_query_policy(empty_query)
    _validate_rank_args(limit, min_score)
    _check_str(query, "query")
    for s in strings:
        _check_str(s, "strings item")

    if not query:
        return _empty_query_results(strings, policy, limit, min_score)

    scored = [
        MatchResult(text=s, score=fzf_score(s, query), id=i) for i, s in enumerate(strings)
    ]
    return _rank(scored, limit, min_score)


def extract(
    query: str,
    choices: Sequence[str],
    limit: Optional[int] = 10,
    min_score: Optional[int] = None,
) -> list[MatchResult]:
    """
    Find top N matches from a list (RapidFuzz-style argument order).

    Example:
        >>> [r.text for r in extract("ace", ["abcdef", "ace", "xyz"])]
        ['ace', 'abcdef']
    """
    return find_best_matches(choices, query, limit=limit, min_score=min_score)


def extract_one(
    query: str,
    choices: Sequence[str],
    min_score: Optional[int] = None,
) -> Optional[MatchResult]:
    """
    Find the single best match, or None if nothing matches.

    Example:
        >>> extract_one("h", ["xhello", "hello"]).text
        'hello'
        >>> extract_one("xyz", ["hello"]) is None
        True
    """
    results = find_best_matches(choices, query, limit=1, min_score=min_score)
    return results[0] if results else None
