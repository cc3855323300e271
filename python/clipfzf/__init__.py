"""
clipfzf - Fuzzy search for clipboard history

Ranks clipboard entries against what the user types, fzf-style: the query
must appear in the entry as a case-insensitive subsequence, and matches
that start the text, follow a separator, sit on a camelCase boundary or
run without gaps score higher.

Example usage:
    >>> import clipfzf as cf

    # Best score of a query against one text
    >>> cf.fzf_score("hello_world", "hw")
    18
    >>> cf.is_match(cf.fzf_score("hello", "xyz"))
    False

    # Rank a list of texts (returns MatchResult objects)
    >>> matches = cf.find_best_matches(["helloworld", "hello_world", "goodbye"], "hw")
    >>> [(m.text, m.score) for m in matches]
    [('hello_world', 18), ('helloworld', 17)]

    # Keep history in an index that caches per-entry work
    >>> index = cf.ClipboardIndex([cf.ClipboardEntry.now("git stash pop")])
    >>> [r.text for r in index.search("gsp")]
    ['git stash pop']
"""

import logging
from importlib.metadata import version as _get_version

# Register the .fzf expression namespace
import clipfzf.expr  # noqa: F401

# Import polars subpackage for `from clipfzf import polars` style
from clipfzf import polars
from clipfzf._config import configure, reset_config
from clipfzf._core import (
    BOUNDARY_SCORE,
    CAMEL_CASE_SCORE,
    GAP_SCORE,
    INITIAL_SCORE,
    MATCH_SCORE,
    NO_SCORE,
    # Result types
    MatchResult,
    best_score,
    # Scoring
    compute_bonus,
    extract,
    extract_one,
    # Ranking
    find_best_matches,
    fzf_score,
    is_match,
    score_text,
)
from clipfzf._exceptions import ClipFzfError, ClipIndexError, ValidationError
from clipfzf.entries import ClipboardEntry
from clipfzf.enums import EmptyQueryPolicy, EntryKind, TieBreak
from clipfzf.index import ClipboardIndex, SearchResult

# -----------------------------------------------------------------------------
# Polars Integration
# -----------------------------------------------------------------------------
from clipfzf.polars_ext import (
    match_series,
    rank_dataframe,
    rank_series,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = _get_version("clipfzf")
__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "ClipFzfError",
    "ValidationError",
    "ClipIndexError",
    # Result types
    "MatchResult",
    "SearchResult",
    # Enums
    "EmptyQueryPolicy",
    "TieBreak",
    "EntryKind",
    # Scoring constants
    "INITIAL_SCORE",
    "BOUNDARY_SCORE",
    "CAMEL_CASE_SCORE",
    "MATCH_SCORE",
    "GAP_SCORE",
    "NO_SCORE",
    # Scoring
    "compute_bonus",
    "score_text",
    "best_score",
    "is_match",
    "fzf_score",
    # Ranking
    "find_best_matches",
    "extract",
    "extract_one",
    # Clipboard history
    "ClipboardEntry",
    "ClipboardIndex",
    # Configuration
    "configure",
    "reset_config",
    # Polars Integration
    "rank_series",
    "rank_dataframe",
    "match_series",
    # Polars subpackage
    "polars",
]


# Convenience alias
score = fzf_score
