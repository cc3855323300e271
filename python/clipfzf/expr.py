"""Polars expression namespace for clipboard fuzzy search.

This module registers a `.fzf` namespace on Polars expressions, enabling
fuzzy subsequence scoring directly in Polars expression contexts.

Note:
    Scoring runs per row through map_elements. Nulls map to null.

Example:
    >>> import polars as pl
    >>> import clipfzf  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"content": ["hello_world", "helloworld", "goodbye"]})
    >>> df.with_columns(score=pl.col("content").fzf.score("hw"))
"""

from typing import Optional

import polars as pl

from clipfzf._core import _check_str, extract_one, fzf_score, is_match


@pl.api.register_expr_namespace("fzf")
class FzfExprNamespace:
    """
    Fuzzy subsequence scoring namespace for Polars expressions.

    Access via `.fzf` on any string expression.
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def score(self, query: str) -> pl.Expr:
        """
        Best score of the query against each value.

        Args:
            query: Query typed by the user

        Returns:
            Int64 expression; null where the value is null or does not match

        Example:
            >>> df.with_columns(score=pl.col("content").fzf.score("hw"))
        """
        _check_str(query, "query")

        def score_value(value) -> Optional[int]:
            if value is None:
                return None
            score = fzf_score(str(value), query)
            return score if is_match(score) else None

        return self._expr.map_elements(score_value, return_dtype=pl.Int64)

    def is_match(self, query: str) -> pl.Expr:
        """
        Check if the query is a case-insensitive subsequence of each value.

        Returns:
            Boolean expression (false for nulls)

        Example:
            >>> df.filter(pl.col("content").fzf.is_match("hw"))
        """
        return self.score(query).is_not_null()

    def best_match(
        self,
        choices: list[str],
        min_score: Optional[int] = None,
    ) -> pl.Expr:
        """
        Use each value as a query and find the best matching choice.

        Args:
            choices: Candidate texts
            min_score: Minimum score to return a match (otherwise null)

        Returns:
            Expression with the best matching string (or null)

        Example:
            >>> df.with_columns(
            ...     snippet=pl.col("typed").fzf.best_match(history)
            ... )
        """

        def find_best(value):
            if value is None:
                return None
            result = extract_one(str(value), choices, min_score=min_score)
            return result.text if result else None

        return self._expr.map_elements(find_best, return_dtype=pl.Utf8)

    def best_match_score(
        self,
        choices: list[str],
        min_score: Optional[int] = None,
    ) -> pl.Expr:
        """
        Get both the best match and its score as a struct.

        Returns:
            Struct expression with fields 'match' and 'score'

        Example:
            >>> df.with_columns(
            ...     result=pl.col("typed").fzf.best_match_score(history)
            ... ).select(
            ...     pl.col("result").struct.field("match"),
            ...     pl.col("result").struct.field("score"),
            ... )
        """

        def find_best_with_score(value):
            if value is None:
                return {"match": None, "score": None}
            result = extract_one(str(value), choices, min_score=min_score)
            if result:
                return {"match": result.text, "score": result.score}
            return {"match": None, "score": None}

        return self._expr.map_elements(
            find_best_with_score,
            return_dtype=pl.Struct({"match": pl.Utf8, "score": pl.Int64}),
        )
