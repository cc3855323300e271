"""
Polars integration for clipfzf.

Levels:
    1. **Expression Namespace** (`.fzf`) - Per-row scoring
       Example: `df.with_columns(score=pl.col("content").fzf.score("hw"))`

    2. **DataFrame Functions** - Ranking and pairwise matching
       Example: `rank_dataframe(history, "hw", column="content")`

Examples:
    >>> import polars as pl
    >>> import clipfzf.polars as cfp  # or: from clipfzf import polars as cfp

    # Expression namespace (registered automatically when importing clipfzf)
    >>> df = pl.DataFrame({"content": ["hello_world", "goodbye"]})
    >>> df.filter(pl.col("content").fzf.is_match("hw"))

    # DataFrame functions
    >>> cfp.rank_series(df["content"], "hw")
"""

# Expression namespace is registered on import
import clipfzf.expr as _expr  # noqa: F401

from clipfzf.polars_ext import (
    match_series,
    rank_dataframe,
    rank_series,
)

__all__ = [
    "rank_series",
    "rank_dataframe",
    "match_series",
]
