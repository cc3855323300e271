"""Batch operations API for clipfzf.

This module scores one query against many clipboard texts. Large inputs
are split into contiguous chunks and scored on a thread pool; results are
always reassembled in input order, so the output never depends on the
number of threads.

Example usage:
    >>> import clipfzf.batch as batch

    # Best score of the query against every string, in input order
    >>> results = batch.similarity(["hello_world", "helloworld", "goodbye"], "hw")
    >>> [(r.text, r.score) for r in results]
    [('hello_world', 18), ('helloworld', 17), ('goodbye', -2147483648)]

    # Ranked matches only
    >>> matches = batch.best_matches(["helloworld", "hello_world", "goodbye"], "hw")
    >>> [(m.text, m.score) for m in matches]
    [('hello_world', 18), ('helloworld', 17)]

    # Score matrix: one row per query, one column per choice
    >>> batch.score_matrix(["h", "hw"], ["hello", "xhello"])
    [[15, 10], [-2147483648, -2147483648]]
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Optional

from clipfzf._config import get_max_workers, get_parallel_threshold
from clipfzf._core import (
    MatchResult,
    _check_str,
    _empty_query_results,
    _rank,
    _validate_rank_args,
    fzf_score,
)
from clipfzf._exceptions import ValidationError
from clipfzf._utils import normalize_empty_query_policy

if TYPE_CHECKING:
    from clipfzf.enums import EmptyQueryPolicy

logger = logging.getLogger(__name__)

__all__ = [
    "similarity",
    "best_matches",
    "score_matrix",
]


def _score_chunk(strings: Sequence[str], query: str) -> list[int]:
    return [fzf_score(s, query) for s in strings]


def _chunks(strings: Sequence[str], count: int) -> list[Sequence[str]]:
    size = -(-len(strings) // count)
    return [strings[start : start + size] for start in range(0, len(strings), size)]


def _best_scores(strings: Sequence[str], query: str, workers: Optional[int]) -> list[int]:
    """Best score of query against every string, in input order."""
    if workers is None:
        workers = get_max_workers()
    if workers <= 1 or len(strings) < get_parallel_threshold():
        return _score_chunk(strings, query)

    chunks = _chunks(strings, workers)
    logger.debug(
        "Scoring %d texts in %d chunks on %d threads", len(strings), len(chunks), workers
    )
    with ThreadPoolExecutor(max_workers=workers) as executor:
        scored = executor.map(_score_chunk, chunks, [query] * len(chunks))
        return [score for chunk_scores in scored for score in chunk_scores]


def _check_inputs(strings: Sequence[str], query: str, workers: Optional[int]) -> None:
    _check_str(query, "query")
    for s in strings:
        _check_str(s, "strings item")
    if workers is not None and (
        isinstance(workers, bool) or not isinstance(workers, int) or workers < 1
    ):
        raise ValidationError(f"workers must be a positive int or None, got {workers!r}")


def similarity(
    strings: Sequence[str],
    query: str,
    workers: Optional[int] = None,
) -> list[MatchResult]:
    """Compute the best score of a query against all strings.

    Results are returned in the same order as the input strings, including
    strings that do not match (their score is NO_SCORE).

    Args:
        strings: Clipboard texts to score.
        query: The query typed by the user.
        workers: Thread count; defaults to the configured max_workers.

    Returns:
        List of MatchResult objects in the same order as input strings.
        Each result has `text`, `score`, and `id` fields where `id` is
        the original index in the input list.

    Example:
        >>> results = similarity(["hello", "xhello"], "h")
        >>> [r.score for r in results]
        [15, 10]
    """
    _check_inputs(strings, query, workers)
    scores = _best_scores(strings, query, workers)
    return [
        MatchResult(text=s, score=score, id=i)
        for i, (s, score) in enumerate(zip(strings, scores))
    ]


def best_matches(
    strings: Sequence[str],
    query: str,
    limit: Optional[int] = 10,
    min_score: Optional[int] = None,
    empty_query: str | EmptyQueryPolicy = "neutral",
    workers: Optional[int] = None,
) -> list[MatchResult]:
    """Find the best matching strings for a query.

    Scores every string, drops the ones the query is not a subsequence of,
    filters by minimum score, sorts by score descending and returns the top
    matches up to the specified limit. Ties keep input order.

    Args:
        strings: Clipboard texts to search.
        query: The query typed by the user.
        limit: Maximum number of results to return (None for all).
        min_score: Minimum score to include in results.
        empty_query: Policy for an empty query: "neutral" returns every
            string with score 0, "no_match" returns nothing.
        workers: Thread count; defaults to the configured max_workers.

    Returns:
        List of MatchResult objects sorted by score descending.

    Example:
        >>> matches = best_matches(["abcdef", "ace", "xyz"], "ace")
        >>> [(m.text, m.score) for m in matches]
        [('ace', 35), ('abcdef', 31)]
    """
    policy = normalize_empty_query_policy(empty_query)
    _validate_rank_args(limit, min_score)
    _check_inputs(strings, query, workers)

    if not query:
        return _empty_query_results(strings, policy, limit, min_score)

    scores = _best_scores(strings, query, workers)
    results = [
        MatchResult(text=s, score=score, id=i)
        for i, (s, score) in enumerate(zip(strings, scores))
    ]
    return _rank(results, limit, min_score)


def score_matrix(
    queries: Sequence[str],
    choices: Sequence[str],
    workers: Optional[int] = None,
) -> list[list[int]]:
    """Compute the best score of every query against every choice.

    Args:
        queries: Queries (rows of the output matrix).
        choices: Clipboard texts (columns of the output matrix).
        workers: Thread count; defaults to the configured max_workers.

    Returns:
        2D list where result[i][j] is the best score of queries[i]
        against choices[j] (NO_SCORE when it does not match).

    Example:
        >>> matrix = score_matrix(["ace", "xyz"], ["abcdef", "ace"])
        >>> matrix[0]
        [31, 35]
    """
    for q in queries:
        _check_str(q, "queries item")
    _check_inputs(choices, "", workers)
    return [_best_scores(choices, q, workers) for q in queries]
