"""Internal utilities for clipfzf."""

from enum import Enum
from typing import Type, TypeVar, Union

from clipfzf._exceptions import ValidationError
from clipfzf.enums import EmptyQueryPolicy, EntryKind, TieBreak

_E = TypeVar("_E", bound=Enum)


def _normalize_enum(value: Union[str, _E], enum_cls: Type[_E], name: str) -> _E:
    if isinstance(value, enum_cls):
        return value

    if isinstance(value, str):
        try:
            return enum_cls(value.lower())
        except ValueError:
            raise ValidationError(
                f"Unknown {name}: '{value}'. "
                f"Valid options: {sorted(member.value for member in enum_cls)}"
            ) from None

    raise TypeError(
        f"{name} must be str or {enum_cls.__name__} enum, got {type(value).__name__}"
    )


def normalize_empty_query_policy(
    policy: Union[str, EmptyQueryPolicy],
) -> EmptyQueryPolicy:
    """Convert a string to EmptyQueryPolicy, or validate an enum value.

    Args:
        policy: Either an EmptyQueryPolicy value or its string name.

    Returns:
        The matching EmptyQueryPolicy.

    Raises:
        ValidationError: If the policy name is not recognized.
        TypeError: If policy is not a string or EmptyQueryPolicy.

    Example:
        >>> normalize_empty_query_policy("NEUTRAL")
        <EmptyQueryPolicy.NEUTRAL: 'neutral'>
    """
    return _normalize_enum(policy, EmptyQueryPolicy, "empty query policy")


def normalize_tie_break(tie_break: Union[str, TieBreak]) -> TieBreak:
    """Convert a string to TieBreak, or validate an enum value."""
    return _normalize_enum(tie_break, TieBreak, "tie break")


def normalize_entry_kind(kind: Union[str, EntryKind]) -> EntryKind:
    """Convert a string to EntryKind, or validate an enum value."""
    return _normalize_enum(kind, EntryKind, "entry kind")


__all__ = [
    "normalize_empty_query_policy",
    "normalize_tie_break",
    "normalize_entry_kind",
]
