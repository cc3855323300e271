"""Tests for clipboard entries and timestamps."""

import pytest

import clipfzf as cf
from clipfzf import ClipboardEntry, EntryKind
from clipfzf.entries import parse_timestamp


class TestParseTimestamp:
    """RFC 3339 parsing."""

    def test_utc_suffix(self):
        assert parse_timestamp("2024-01-01T00:00:00Z") == 1704067200

    def test_offset(self):
        assert parse_timestamp("2024-01-01T02:00:00+02:00") == 1704067200

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-01-01T00:00:00") == 1704067200

    def test_fractional_seconds(self):
        assert parse_timestamp("2024-01-01T00:00:00.250000+00:00") == 1704067200.25

    def test_nanosecond_fraction(self):
        """Timestamps written with nanosecond precision are truncated to microseconds."""
        assert parse_timestamp("2024-01-01T00:00:00.123456789+00:00") == pytest.approx(
            1704067200.123456
        )

    def test_short_fraction(self):
        assert parse_timestamp("2024-01-01T00:00:00.5Z") == 1704067200.5

    def test_sub_second_order(self):
        first = parse_timestamp("2024-01-01T10:00:00.100Z")
        second = parse_timestamp("2024-01-01T10:00:00.200Z")
        assert second > first

    def test_invalid(self):
        with pytest.raises(cf.ValidationError, match="Invalid timestamp"):
            parse_timestamp("yesterday")

    def test_non_str(self):
        with pytest.raises(TypeError):
            parse_timestamp(1704067200)


class TestClipboardEntry:
    """Tests for ClipboardEntry."""

    def test_defaults(self):
        entry = ClipboardEntry("git status", "2024-01-01T00:00:00Z")
        assert entry.id is None
        assert entry.kind is EntryKind.TEXT
        assert entry.is_text
        assert not entry.is_image
        assert entry.text == "git status"
        assert entry.timestamp == 1704067200

    def test_kind_from_string(self):
        entry = ClipboardEntry("/tmp/a.png", "2024-01-01T00:00:00Z", kind="IMAGE")
        assert entry.kind is EntryKind.IMAGE
        assert entry.is_image

    def test_image_has_no_searchable_text(self):
        entry = ClipboardEntry("/tmp/a.png", "2024-01-01T00:00:00Z", kind="image")
        assert entry.text == ""
        assert entry.content == "/tmp/a.png"

    def test_unknown_kind(self):
        with pytest.raises(cf.ValidationError, match="Unknown entry kind"):
            ClipboardEntry("x", "2024-01-01T00:00:00Z", kind="video")

    def test_content_must_be_str(self):
        with pytest.raises(TypeError):
            ClipboardEntry(b"bytes", "2024-01-01T00:00:00Z")

    def test_bad_timestamp(self):
        with pytest.raises(cf.ValidationError):
            ClipboardEntry("x", "not a time")

    def test_now(self):
        entry = ClipboardEntry.now("hello")
        assert entry.content == "hello"
        assert entry.created_at.endswith("+00:00")
        assert entry.timestamp > 1704067200

    def test_frozen(self):
        entry = ClipboardEntry.now("hello")
        with pytest.raises(AttributeError):
            entry.content = "changed"

    def test_with_id(self):
        entry = ClipboardEntry("a", "2024-01-01T00:00:00Z")
        stored = entry.with_id(5)
        assert stored.id == 5
        assert entry.id is None
        assert stored.content == entry.content

    def test_dict_round_trip(self):
        entry = ClipboardEntry("a", "2024-01-01T00:00:00Z", id=3, kind="image")
        data = entry.to_dict()
        assert data == {
            "id": 3,
            "content": "a",
            "created_at": "2024-01-01T00:00:00Z",
            "kind": "image",
        }
        assert ClipboardEntry.from_dict(data) == entry

    def test_from_dict_defaults(self):
        entry = ClipboardEntry.from_dict({"content": "a", "created_at": "2024-01-01T00:00:00Z"})
        assert entry.id is None
        assert entry.kind is EntryKind.TEXT

    def test_nanosecond_timestamp_accepted(self):
        entry = ClipboardEntry("a", "2024-03-01T09:00:00.123456789+00:00")
        assert ClipboardEntry.from_dict(entry.to_dict()) == entry
        assert entry.timestamp == pytest.approx(1709283600.123456)
