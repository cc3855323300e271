"""ClipboardIndex for repeated fuzzy searches over clipboard history.

This module provides a high-level interface for holding clipboard entries
in memory and searching them as the user types. Bonus vectors depend only
on an entry's text, so they are computed once when the entry is added and
reused by every search.

Warning:
    This class is NOT thread-safe. Create separate instances per thread
    for concurrent operations, or guard mutations with a lock.
"""

import logging
import pickle
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import polars as pl

from clipfzf._core import (
    _check_str,
    _validate_rank_args,
    best_score,
    compute_bonus,
    is_match,
    score_text,
)
from clipfzf._exceptions import ClipIndexError, ValidationError
from clipfzf._utils import (
    normalize_empty_query_policy,
    normalize_entry_kind,
    normalize_tie_break,
)
from clipfzf.entries import ClipboardEntry
from clipfzf.enums import EmptyQueryPolicy, EntryKind, TieBreak

logger = logging.getLogger(__name__)

_SAVE_FORMAT_VERSION = 1


@dataclass(frozen=True)
class SearchResult:
    """
    Result of a ClipboardIndex search.

    Attributes:
        id: Identifier of the matched entry
        text: The matched entry's content
        score: Best score of the query against the entry (0 for empty queries)
        created_at: Creation time of the entry
        kind: Content type of the entry
    """

    id: int
    text: str
    score: int
    created_at: str
    kind: EntryKind = EntryKind.TEXT


class ClipboardIndex:
    """
    A reusable clipboard history index for fuzzy search.

    Entries are kept in insertion order. Text entries get their bonus
    vector cached on insertion, and every entry its parsed creation time;
    image entries are only listed for empty queries.

    The index can be persisted to disk and reloaded for later use.

    Warning:
        This class is NOT thread-safe. Create separate instances for each
        thread when using in concurrent applications.

    Example:
        >>> from clipfzf import ClipboardEntry, ClipboardIndex
        >>>
        >>> index = ClipboardIndex([
        ...     ClipboardEntry("helloworld", "2024-01-01T10:00:00Z"),
        ...     ClipboardEntry("hello_world", "2024-01-01T09:00:00Z"),
        ... ])
        >>> [(r.text, r.score) for r in index.search("hw")]
        [('hello_world', 18), ('helloworld', 17)]
        >>>
        >>> # Save for later reuse
        >>> index.save("history.pkl")
        >>> index = ClipboardIndex.load("history.pkl")
    """

    def __init__(self, entries: Iterable[ClipboardEntry] = ()):
        """
        Create a ClipboardIndex from clipboard entries.

        Args:
            entries: Entries to index. Entries without an id get the next
                free integer id.
        """
        self._entries: Dict[int, ClipboardEntry] = {}
        self._bonuses: Dict[int, List[int]] = {}
        self._timestamps: Dict[int, float] = {}
        self._next_id = 1
        self.add_all(entries)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_series(
        cls,
        series: "pl.Series",
        created_at: Optional[str] = None,
    ) -> "ClipboardIndex":
        """
        Create a ClipboardIndex of text entries from a Polars Series.

        Args:
            series: Polars Series of clipboard texts; nulls are skipped
            created_at: Timestamp given to every entry (default: now)

        Returns:
            ClipboardIndex instance

        Example:
            >>> texts = pl.Series(["git status", "docker ps", "git log"])
            >>> index = ClipboardIndex.from_series(texts)
        """
        entries = []
        for value in series.to_list():
            if value is None:
                continue
            if created_at is None:
                entries.append(ClipboardEntry.now(str(value)))
            else:
                entries.append(ClipboardEntry(str(value), created_at))
        return cls(entries)

    @classmethod
    def from_dataframe(
        cls,
        df: "pl.DataFrame",
        column: str = "content",
        created_at_column: Optional[str] = "created_at",
        id_column: Optional[str] = None,
        kind_column: Optional[str] = None,
    ) -> "ClipboardIndex":
        """
        Create a ClipboardIndex from DataFrame rows.

        Args:
            df: Polars DataFrame, one clipboard entry per row
            column: Column holding the entry content
            created_at_column: Column holding RFC 3339 timestamps, or None
                to stamp every entry with the current time
            id_column: Column holding entry ids, or None to number entries
            kind_column: Column holding "text"/"image", or None for text only

        Returns:
            ClipboardIndex instance

        Raises:
            ValidationError: If a named column is missing.
        """
        for name in (column, created_at_column, id_column, kind_column):
            if name is not None and name not in df.columns:
                raise ValidationError(f"Column not found: '{name}'")

        entries = []
        for row in df.iter_rows(named=True):
            content = row[column]
            if content is None:
                continue
            kind = row[kind_column] if kind_column is not None else EntryKind.TEXT
            entry_id = row[id_column] if id_column is not None else None
            if created_at_column is None:
                entries.append(ClipboardEntry.now(str(content), kind=kind, id=entry_id))
            else:
                entries.append(
                    ClipboardEntry(
                        content=str(content),
                        created_at=str(row[created_at_column]),
                        id=entry_id,
                        kind=kind,
                    )
                )
        return cls(entries)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, entry: ClipboardEntry) -> int:
        """
        Add an entry to the index.

        Args:
            entry: Entry to add

        Returns:
            The entry's id (assigned if the entry had none)

        Raises:
            ClipIndexError: If an entry with the same id is already indexed.
        """
        if not isinstance(entry, ClipboardEntry):
            raise TypeError(f"entry must be ClipboardEntry, got {type(entry).__name__}")

        if entry.id is None:
            entry = entry.with_id(self._next_id)
        elif entry.id in self._entries:
            raise ClipIndexError(f"Duplicate entry id: {entry.id}")

        self._entries[entry.id] = entry
        if entry.is_text:
            self._bonuses[entry.id] = compute_bonus(entry.content)
        self._timestamps[entry.id] = entry.timestamp
        self._next_id = max(self._next_id, entry.id + 1)
        logger.debug("Indexed %s entry %d", entry.kind.value, entry.id)
        return entry.id

    def add_all(self, entries: Iterable[ClipboardEntry]) -> List[int]:
        """Add several entries; returns their ids in order."""
        return [self.add(entry) for entry in entries]

    def remove(self, entry_id: int) -> ClipboardEntry:
        """
        Remove an entry by id.

        Returns:
            The removed entry

        Raises:
            ClipIndexError: If no entry has this id.
        """
        try:
            entry = self._entries.pop(entry_id)
        except KeyError:
            raise ClipIndexError(f"No entry with id {entry_id}") from None
        self._bonuses.pop(entry_id, None)
        self._timestamps.pop(entry_id)
        logger.debug("Removed entry %d", entry_id)
        return entry

    def clear(self) -> None:
        """Remove every entry. Ids keep increasing after a clear."""
        self._entries.clear()
        self._bonuses.clear()
        self._timestamps.clear()
        logger.debug("Cleared index")

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, entry_id: int) -> Optional[ClipboardEntry]:
        """Return the entry with this id, or None."""
        return self._entries.get(entry_id)

    def get_entries(self) -> List[ClipboardEntry]:
        """Return the indexed entries in insertion order."""
        return list(self._entries.values())

    def count(self, kind: Optional[Union[str, EntryKind]] = None) -> int:
        """
        Count indexed entries.

        Args:
            kind: Only count entries of this kind ("text" or "image"),
                None for all
        """
        if kind is None:
            return len(self._entries)
        kind = normalize_entry_kind(kind)
        return sum(1 for entry in self._entries.values() if entry.kind is kind)

    def recent(
        self,
        limit: Optional[int] = None,
        kind: Optional[Union[str, EntryKind]] = None,
    ) -> List[ClipboardEntry]:
        """
        Return entries newest first.

        Args:
            limit: Maximum number of entries, None for all
            kind: Only return entries of this kind, None for all
        """
        _validate_rank_args(limit, None)
        entries = self._ordered(TieBreak.RECENCY, kind)
        return entries if limit is None else entries[:limit]

    def _ordered(
        self,
        tie_break: TieBreak,
        kind: Optional[Union[str, EntryKind]] = None,
    ) -> List[ClipboardEntry]:
        if kind is not None:
            kind = normalize_entry_kind(kind)
        entries = [e for e in self._entries.values() if kind is None or e.kind is kind]
        if tie_break is TieBreak.RECENCY:
            # Equal timestamps: the later insertion comes first
            entries.reverse()
            entries.sort(key=lambda e: self._timestamps[e.id], reverse=True)
        return entries

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(
        self,
        query: str,
        limit: Optional[int] = 10,
        min_score: Optional[int] = None,
        tie_break: Union[str, TieBreak] = "recency",
        empty_query: Union[str, EmptyQueryPolicy] = "neutral",
        kind: Optional[Union[str, EntryKind]] = None,
    ) -> List[SearchResult]:
        """
        Search the index for entries matching the query.

        Args:
            query: Query typed by the user
            limit: Maximum number of results to return (None for all)
            min_score: Drop matches scoring below this value
            tie_break: Order of equal scores: "recency" (newest first,
                later insertion first for equal timestamps) or "insertion"
                (insertion order)
            empty_query: "neutral" lists every entry with score 0,
                "no_match" returns nothing
            kind: Only consider entries of this kind ("text" or "image"),
                None for all. Image entries never match a non-empty query.

        Returns:
            List of SearchResult objects sorted by score descending
        """
        _check_str(query, "query")
        _validate_rank_args(limit, min_score)
        order = normalize_tie_break(tie_break)
        policy = normalize_empty_query_policy(empty_query)
        entries = self._ordered(order, kind)

        if not query:
            if policy is EmptyQueryPolicy.NO_MATCH:
                return []
            results = [self._result(entry, 0) for entry in entries]
        else:
            results = []
            for entry in entries:
                if not entry.is_text:
                    continue
                score = best_score(
                    score_text(entry.content, query, bonus=self._bonuses[entry.id])
                )
                if is_match(score):
                    results.append(self._result(entry, score))
            results.sort(key=lambda r: r.score, reverse=True)

        if min_score is not None:
            results = [r for r in results if r.score >= min_score]
        if limit is not None:
            results = results[:limit]
        return results

    @staticmethod
    def _result(entry: ClipboardEntry, score: int) -> SearchResult:
        return SearchResult(
            id=entry.id,
            text=entry.content,
            score=score,
            created_at=entry.created_at,
            kind=entry.kind,
        )

    def search_series(
        self,
        queries: "pl.Series",
        limit: Optional[int] = 1,
        min_score: Optional[int] = None,
        include_query: bool = True,
    ) -> "pl.DataFrame":
        """
        Search for each query in a Series, returning a DataFrame of results.

        Args:
            queries: Series of query strings
            limit: Maximum matches per query (default: 1 for best match only)
            min_score: Drop matches scoring below this value
            include_query: Include query column in results

        Returns:
            DataFrame with columns:
            - query_idx: Index of the query in the input Series
            - query: The query string (if include_query=True)
            - match: The matched entry's content
            - match_id: Id of the matched entry
            - score: Match score
        """
        rows = []
        for query_idx, query in enumerate(queries.to_list()):
            if query is None:
                continue

            for match in self.search(str(query), limit=limit, min_score=min_score):
                row = {
                    "query_idx": query_idx,
                    "match": match.text,
                    "match_id": match.id,
                    "score": match.score,
                }
                if include_query:
                    row["query"] = str(query)
                rows.append(row)

        columns = ["query_idx", "query", "match", "match_id", "score"]
        if not include_query:
            columns.remove("query")
        if not rows:
            schema = {
                "query_idx": pl.Int64,
                "query": pl.Utf8,
                "match": pl.Utf8,
                "match_id": pl.Int64,
                "score": pl.Int64,
            }
            return pl.DataFrame(schema={name: schema[name] for name in columns})

        return pl.DataFrame(rows).select(columns)

    def batch_search(
        self,
        queries: List[str],
        limit: Optional[int] = 1,
        min_score: Optional[int] = None,
    ) -> List[List[SearchResult]]:
        """
        Search for multiple queries, returning results for each.

        Returns:
            List of lists, where each inner list contains SearchResult
            objects for the corresponding query
        """
        return [self.search(q, limit=limit, min_score=min_score) for q in queries]

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the index to a file.

        Only entry data is stored; bonus vectors are rebuilt on load.

        Args:
            path: File path to save to (typically .pkl extension)
        """
        data = {
            "version": _SAVE_FORMAT_VERSION,
            "next_id": self._next_id,
            "entries": [entry.to_dict() for entry in self._entries.values()],
        }
        with open(path, "wb") as f:
            pickle.dump(data, f)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ClipboardIndex":
        """
        Load an index from a file.

        Warning:
            Only load files you created; pickle can execute code.

        Raises:
            ClipIndexError: If the file does not hold a saved ClipboardIndex.
        """
        with open(path, "rb") as f:
            data = pickle.load(f)

        if not isinstance(data, dict) or data.get("version") != _SAVE_FORMAT_VERSION:
            raise ClipIndexError(f"Not a saved ClipboardIndex: {path}")

        index = cls(ClipboardEntry.from_dict(item) for item in data["entries"])
        index._next_id = max(index._next_id, data["next_id"])
        return index

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        """Return the number of indexed entries."""
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __repr__(self) -> str:
        return f"ClipboardIndex(size={len(self._entries)})"
