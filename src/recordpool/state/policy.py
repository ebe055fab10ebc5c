"""Deterministic freshness and sibling-ordering policy.

This module intentionally contains *no* event parsing. The reducer hands it
plain timestamps and field values.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

_TICK = timedelta(microseconds=1)


def refreshed_at(now: datetime, previous: datetime | None, *, strictly_forward: bool) -> datetime:
    """Timestamp for a record that was just confirmed fresh."""
    if strictly_forward and previous is not None and previous >= now:
        return previous + _TICK
    return now


def is_expired(now: datetime, fetched_at: datetime, ttl: timedelta | None) -> bool:
    if ttl is None:
        return False
    return fetched_at <= now - ttl


def is_position(value: Any) -> bool:
    # bool is an int subclass but never a sibling position.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def should_shift_sibling(
    sibling: dict[str, Any],
    *,
    parent_field: str,
    position_field: str,
    parent: Any,
    position: Any,
) -> bool:
    """Decide whether a sibling must move down to make room at *position*.

    Policy:
    - Only records under the same parent are candidates.
    - A sibling at or after the insertion point shifts by one.
    - Missing or non-numeric positions never shift.
    """
    if sibling.get(parent_field) != parent:
        return False
    sibling_position = sibling.get(position_field)
    if not is_position(sibling_position) or not is_position(position):
        return False
    return sibling_position >= position
