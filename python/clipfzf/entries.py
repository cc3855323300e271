"""Clipboard history entries."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

from clipfzf._core import _check_str
from clipfzf._exceptions import ValidationError
from clipfzf._utils import normalize_entry_kind
from clipfzf.enums import EntryKind

# Fractional seconds; datetime.fromisoformat takes at most microseconds
_FRACTION = re.compile(r"\.(\d+)")


def _microseconds(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(created_at: str) -> float:
    """Convert an RFC 3339 timestamp to seconds since the epoch.

    Naive timestamps are taken as UTC. Fractions finer than a microsecond
    (e.g. nanosecond timestamps) are truncated.

    Raises:
        TypeError: If created_at is not a string.
        ValidationError: If created_at is not an ISO 8601 timestamp.

    Example:
        >>> parse_timestamp("2024-01-01T00:00:00Z")
        1704067200.0
        >>> parse_timestamp("2024-01-01T00:00:00.123456789+00:00")
        1704067200.123456
    """
    _check_str(created_at, "created_at")
    if created_at.endswith(("Z", "z")):
        created_at = created_at[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(_FRACTION.sub(_microseconds, created_at, count=1))
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {created_at!r}") from None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


@dataclass(frozen=True)
class ClipboardEntry:
    """One item of clipboard history.

    Attributes:
        content: Text content, or the image location for image entries
        created_at: RFC 3339 creation time
        id: Storage identifier, None until the entry is stored
        kind: Text or image
    """

    content: str
    created_at: str
    id: Optional[int] = None
    kind: EntryKind = field(default=EntryKind.TEXT)

    def __post_init__(self) -> None:
        if not isinstance(self.content, str):
            raise TypeError(f"content must be str, got {type(self.content).__name__}")
        object.__setattr__(self, "kind", normalize_entry_kind(self.kind))
        # Fail early on malformed timestamps
        parse_timestamp(self.created_at)

    @classmethod
    def now(
        cls,
        content: str,
        kind: Union[str, EntryKind] = EntryKind.TEXT,
        id: Optional[int] = None,
    ) -> ClipboardEntry:
        """Create an entry stamped with the current UTC time."""
        created_at = datetime.now(timezone.utc).isoformat()
        return cls(content=content, created_at=created_at, id=id, kind=kind)

    @property
    def is_text(self) -> bool:
        return self.kind is EntryKind.TEXT

    @property
    def is_image(self) -> bool:
        return self.kind is EntryKind.IMAGE

    @property
    def text(self) -> str:
        """The searchable text ("" for images)."""
        return self.content if self.is_text else ""

    @property
    def timestamp(self) -> float:
        return parse_timestamp(self.created_at)

    def with_id(self, id: int) -> ClipboardEntry:
        return ClipboardEntry(
            content=self.content, created_at=self.created_at, id=id, kind=self.kind
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at,
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClipboardEntry:
        return cls(
            content=data["content"],
            created_at=data["created_at"],
            id=data.get("id"),
            kind=data.get("kind", EntryKind.TEXT),
        )
