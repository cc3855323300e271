"""High-level Polars DataFrame operations for clipfzf.

This module ranks clipboard history held in Polars DataFrames and Series
against a typed query.

Functions in This Module
------------------------
- ``rank_series()``: Rank the values of a Series against a query
- ``rank_dataframe()``: Score, filter and sort DataFrame rows by a text column
- ``match_series()``: Every matching (query, target) pair of two Series

Example Usage
-------------
>>> import polars as pl
>>> import clipfzf as cf
>>>
>>> history = pl.DataFrame({
...     "content": ["git status", "docker ps", "git stash pop"],
...     "created_at": ["2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z", "2024-01-01T11:00:00Z"],
... })
>>> cf.rank_dataframe(history, "gst", column="content", recency_column="created_at")

See Also
--------
- ``clipfzf.expr``: Polars expression namespace for column operations
- ``clipfzf.ClipboardIndex``: In-memory index for repeated searches
"""

from typing import Optional, Union

import polars as pl

from clipfzf._core import _check_str, _validate_rank_args, fzf_score, is_match
from clipfzf._exceptions import ValidationError
from clipfzf.batch import best_matches
from clipfzf.enums import EmptyQueryPolicy


def rank_series(
    series: "pl.Series",
    query: str,
    limit: Optional[int] = None,
    min_score: Optional[int] = None,
    empty_query: Union[str, EmptyQueryPolicy] = "neutral",
) -> "pl.DataFrame":
    """
    Rank the values of a Series against a query.

    Nulls never match. Ties keep Series order.

    Args:
        series: Series of clipboard texts
        query: Query typed by the user
        limit: Maximum number of rows to return (None for all)
        min_score: Drop matches scoring below this value
        empty_query: "neutral" returns every non-null value with score 0,
            "no_match" returns nothing

    Returns:
        DataFrame with columns: idx (position in the Series), text, score

    Example:
        >>> ranked = rank_series(pl.Series(["helloworld", "hello_world"]), "hw")
        >>> ranked["text"].to_list()
        ['hello_world', 'helloworld']
    """
    values = series.to_list()
    positions = [i for i, value in enumerate(values) if value is not None]
    texts = [str(values[i]) for i in positions]

    matches = best_matches(
        texts, query, limit=limit, min_score=min_score, empty_query=empty_query
    )
    return pl.DataFrame(
        {
            "idx": [positions[m.id] for m in matches],
            "text": [m.text for m in matches],
            "score": [m.score for m in matches],
        },
        schema={"idx": pl.Int64, "text": pl.Utf8, "score": pl.Int64},
    )


def rank_dataframe(
    df: "pl.DataFrame",
    query: str,
    column: str = "content",
    recency_column: Optional[str] = None,
    limit: Optional[int] = None,
    min_score: Optional[int] = None,
    score_column: str = "score",
) -> "pl.DataFrame":
    """
    Score DataFrame rows by a text column, keep matches, best first.

    Args:
        df: DataFrame with one clipboard entry per row
        query: Query typed by the user; an empty query keeps every row
            with score 0
        column: Column holding the entry text
        recency_column: Column used to break ties, newest first, nulls
            last. Prefer a Datetime column; strings sort lexically, which
            is only chronological when every value uses the same format
            and UTC offset. Without it ties keep row order.
        limit: Maximum number of rows to return (None for all)
        min_score: Drop matches scoring below this value
        score_column: Name of the added score column

    Returns:
        DataFrame with the input columns plus the score column

    Raises:
        ValidationError: If a named column is missing or the score column
            already exists.

    See Also:
        ClipboardIndex.search: Same ranking with cached bonus vectors
    """
    _check_str(query, "query")
    _validate_rank_args(limit, min_score)
    for name in (column, recency_column):
        if name is not None and name not in df.columns:
            raise ValidationError(f"Column not found: '{name}'")
    if score_column in df.columns:
        raise ValidationError(f"Column already exists: '{score_column}'")

    def score_value(value) -> Optional[int]:
        if value is None:
            return None
        if not query:
            return 0
        score = fzf_score(str(value), query)
        return score if is_match(score) else None

    scores = [score_value(value) for value in df[column].to_list()]
    result = df.with_columns(pl.Series(score_column, scores, dtype=pl.Int64)).filter(
        pl.col(score_column).is_not_null()
    )
    if min_score is not None:
        result = result.filter(pl.col(score_column) >= min_score)

    by = [score_column]
    descending = [True]
    if recency_column is not None:
        by.append(recency_column)
        descending.append(True)
    result = result.sort(by, descending=descending, nulls_last=True, maintain_order=True)

    if limit is not None:
        result = result.head(limit)
    return result


def match_series(
    query_series: "pl.Series",
    target_series: "pl.Series",
    min_score: Optional[int] = None,
) -> "pl.DataFrame":
    """
    Match each query against every target.

    Args:
        query_series: Series of queries
        target_series: Series of clipboard texts
        min_score: Drop matches scoring below this value

    Returns:
        DataFrame with columns: query_idx, query, target_idx, target, score,
        ordered by query, then by score descending

    Example:
        >>> queries = pl.Series(["hw", "ace"])
        >>> targets = pl.Series(["hello_world", "abcdef", "ace"])
        >>> match_series(queries, targets)
    """
    _validate_rank_args(None, min_score)
    targets = target_series.to_list()
    positions = [i for i, value in enumerate(targets) if value is not None]
    texts = [str(targets[i]) for i in positions]

    rows = []
    for query_idx, query in enumerate(query_series.to_list()):
        if query is None or query == "":
            continue
        for match in best_matches(texts, str(query), limit=None, min_score=min_score):
            rows.append(
                {
                    "query_idx": query_idx,
                    "query": str(query),
                    "target_idx": positions[match.id],
                    "target": match.text,
                    "score": match.score,
                }
            )

    return pl.DataFrame(
        rows,
        schema={
            "query_idx": pl.Int64,
            "query": pl.Utf8,
            "target_idx": pl.Int64,
            "target": pl.Utf8,
            "score": pl.Int64,
        },
    )
