"""Enums for clipfzf API."""

from enum import Enum


class EmptyQueryPolicy(str, Enum):
    """What rankers return for an empty query.

    String values are accepted wherever a policy is expected.

    Example:
        >>> from clipfzf import EmptyQueryPolicy, find_best_matches
        >>> find_best_matches(["a", "b"], "", empty_query=EmptyQueryPolicy.NO_MATCH)
        []
    """

    NEUTRAL = "neutral"
    """No filtering: every candidate is returned with score 0"""

    NO_MATCH = "no_match"
    """An empty query matches nothing"""


class TieBreak(str, Enum):
    """How ClipboardIndex orders results with equal scores."""

    RECENCY = "recency"
    """Newer entries first (the history view's order)"""

    INSERTION = "insertion"
    """Order in which entries were added to the index"""


class EntryKind(str, Enum):
    """Content type of a clipboard entry."""

    TEXT = "text"
    """Plain text; the only kind that is fuzzy matched"""

    IMAGE = "image"
    """Image data; only listed for empty queries"""


__all__ = ["EmptyQueryPolicy", "TieBreak", "EntryKind"]
