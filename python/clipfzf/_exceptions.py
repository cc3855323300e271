"""Exceptions raised by clipfzf."""


class ClipFzfError(Exception):
    """Base exception for all clipfzf errors."""


class ValidationError(ClipFzfError, ValueError):
    """Raised when input validation fails (invalid parameters, out of range values)."""


class ClipIndexError(ClipFzfError):
    """Raised when index operations fail (unknown id, unreadable saved index)."""


__all__ = ["ClipFzfError", "ValidationError", "ClipIndexError"]
