"""Normalization helpers.

Centralizes tolerant parsing of fetch results and action payloads so the
reducer can stay total.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def is_identifier(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, str))


def safe_identifier(value: Any) -> int | str | None:
    return value if is_identifier(value) else None


def safe_identifiers(value: Any) -> list[int | str]:
    """Return the identifiers in a list/tuple, dropping anything else."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if is_identifier(item)]


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def as_mapping(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def as_record_list(result: Any) -> list[Any]:
    """Return a bulk fetch result as a list.

    - ``None`` -> empty list
    - list/tuple -> list
    - anything else -> empty list
    """

    if isinstance(result, (list, tuple)):
        return list(result)
    return []


def split_records(items: list[Any]) -> tuple[list[dict[str, Any]], list[Any]]:
    """Split items into usable records and rejects.

    A usable record is a mapping whose ``id`` is an identifier.
    """

    records: list[dict[str, Any]] = []
    rejected: list[Any] = []
    for item in items:
        if isinstance(item, Mapping) and is_identifier(item.get("id")):
            records.append(dict(item))
        else:
            rejected.append(item)
    return records, rejected
