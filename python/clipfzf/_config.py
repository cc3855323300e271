"""Runtime settings for batch scoring.

Settings come from environment variables, read once and cached, and can be
overridden at runtime with ``configure()``:

- ``CLIPFZF_MAX_WORKERS``: number of threads used by batch scoring
  (default: ``os.cpu_count()``)
- ``CLIPFZF_PARALLEL_THRESHOLD``: minimum number of texts before batch
  scoring is split across threads (default: 512)
"""

import logging
import os
from typing import Optional

from clipfzf._exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PARALLEL_THRESHOLD = 512

MAX_WORKERS_ENV = "CLIPFZF_MAX_WORKERS"
PARALLEL_THRESHOLD_ENV = "CLIPFZF_PARALLEL_THRESHOLD"


class _ConfigState:
    """Encapsulates config state to avoid global variables."""

    max_workers: Optional[int] = None
    parallel_threshold: Optional[int] = None


_state = _ConfigState()


def _read_positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring %s=%r: must be at least 1, using %d", name, raw, default)
        return default
    return value


def _check_positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an int, got {type(value).__name__}")
    if value < 1:
        raise ValidationError(f"{name} must be at least 1, got {value}")
    return value


def get_max_workers() -> int:
    """Return the number of threads batch scoring may use."""
    if _state.max_workers is None:
        _state.max_workers = _read_positive_int(MAX_WORKERS_ENV, os.cpu_count() or 1)
    return _state.max_workers


def get_parallel_threshold() -> int:
    """Return the input size from which batch scoring uses threads."""
    if _state.parallel_threshold is None:
        _state.parallel_threshold = _read_positive_int(
            PARALLEL_THRESHOLD_ENV, DEFAULT_PARALLEL_THRESHOLD
        )
    return _state.parallel_threshold


def configure(
    max_workers: Optional[int] = None,
    parallel_threshold: Optional[int] = None,
) -> None:
    """Override batch scoring settings at runtime.

    Args:
        max_workers: Number of threads used by batch scoring
        parallel_threshold: Minimum input size before threads are used

    Raises:
        ValidationError: If a value is not a positive int.

    Example:
        >>> import clipfzf
        >>> clipfzf.configure(max_workers=1)  # Always score sequentially
    """
    if max_workers is not None:
        _state.max_workers = _check_positive_int(max_workers, "max_workers")
    if parallel_threshold is not None:
        _state.parallel_threshold = _check_positive_int(parallel_threshold, "parallel_threshold")
    logger.debug(
        "Batch scoring configured: max_workers=%s parallel_threshold=%s",
        _state.max_workers,
        _state.parallel_threshold,
    )


def reset_config() -> None:
    """Drop runtime overrides; settings are re-read from the environment."""
    _state.max_workers = None
    _state.parallel_threshold = None


__all__ = [
    "configure",
    "reset_config",
    "get_max_workers",
    "get_parallel_threshold",
    "DEFAULT_PARALLEL_THRESHOLD",
]
