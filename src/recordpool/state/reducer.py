"""Record pool reducer.

``reduce(pool, event)`` returns the next pool. It never mutates its input and
never raises: events it cannot act on return the pool unchanged.

Merging follows a stale-while-revalidate strategy. Cached records stay
visible until fresh data for the same identifier arrives, and a refresh only
ever replaces records, it never blanks them out.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from recordpool.config import PoolConfig
from recordpool.ingestion.actions import event_from_action
from recordpool.ingestion.normalize import as_record_list, safe_identifier, split_records
from recordpool.state.events import (
    BULK_RESPONSE_KINDS,
    SINGLE_RESPONSE_KINDS,
    MutationKind,
    PoolEvent,
)
from recordpool.state.policy import is_expired, refreshed_at, should_shift_sibling
from recordpool.state.pool import Identifier, Record, RecordPool, empty_pool

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def add_records(
    new_records: Iterable[Record] | None,
    old_pool: RecordPool,
    *,
    now: datetime | None = None,
    ttl: timedelta | None = None,
    strictly_forward: bool = True,
) -> RecordPool:
    """Add fresh records to the pool.

    Every incoming record is stamped ``now``; every other record keeps its
    previous timestamp and content. With a *ttl*, records last stamped at or
    before ``now - ttl`` that are not part of this merge are dropped.
    """
    if now is None:
        now = _utcnow()

    incoming: dict[Identifier, Record] = {}
    for record in new_records or ():
        incoming[record["id"]] = record

    fetched_at: dict[Identifier, datetime] = {}
    expired: list[Identifier] = []
    for record_id, stamp in old_pool.fetched_at.items():
        if record_id not in incoming and is_expired(now, stamp, ttl):
            expired.append(record_id)
            continue
        fetched_at[record_id] = stamp
    for record_id in incoming:
        fetched_at[record_id] = refreshed_at(
            now,
            old_pool.fetched_at.get(record_id),
            strictly_forward=strictly_forward,
        )

    if expired:
        _logger.debug("Dropping %d expired record(s): %s", len(expired), expired)

    records = {
        record_id: incoming[record_id] if record_id in incoming else old_pool.records[record_id]
        for record_id in fetched_at
    }
    return RecordPool.model_construct(records=records, fetched_at=fetched_at)


def remove_records(removed_ids: Iterable[Identifier] | None, old_pool: RecordPool) -> RecordPool:
    """Remove records and their timestamps from the pool in one step."""
    removed = set(removed_ids or ())
    if not removed:
        return old_pool
    records = {key: value for key, value in old_pool.records.items() if key not in removed}
    fetched_at = {key: value for key, value in old_pool.fetched_at.items() if key not in removed}
    return RecordPool.model_construct(records=records, fetched_at=fetched_at)


def _merged(pool: RecordPool, record_id: Identifier, data: Mapping[str, Any]) -> Record:
    record = {**pool.records.get(record_id, {}), **data}
    if "id" not in data:
        record["id"] = record_id
    return record


def _shifted_siblings(pool: RecordPool, moved: Record, parent_field: str, position_field: str) -> list[Record]:
    # Positions are compared against the previous pool; nothing closes the gap
    # a same-parent move leaves at the old position.
    parent = moved.get(parent_field)
    position = moved.get(position_field)
    shifted: list[Record] = []
    for record_id, sibling in pool.records.items():
        if record_id == moved["id"]:
            continue
        if should_shift_sibling(
            sibling,
            parent_field=parent_field,
            position_field=position_field,
            parent=parent,
            position=position,
        ):
            shifted.append({**sibling, "id": record_id, position_field: sibling[position_field] + 1})
    return shifted


class RecordPoolReducer:
    """Pure reducer over :class:`RecordPool` snapshots.

    The reducer holds configuration and a clock, never a pool. Given the same
    clock readings and the same event sequence it produces the same pools.
    """

    def __init__(
        self,
        *,
        config: PoolConfig | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config or PoolConfig()
        self._clock = clock
        self._ttl = timedelta(seconds=self._config.ttl_seconds) if self._config.expires else None

    @property
    def config(self) -> PoolConfig:
        return self._config

    def __call__(self, pool: RecordPool | None, event: Any) -> RecordPool:
        if pool is None:
            pool = empty_pool()
        if isinstance(event, Mapping):
            event = event_from_action(event)
        if not isinstance(event, PoolEvent):
            _logger.debug("Ignoring non-event %r", type(event).__name__)
            return pool

        if event.optimistic:
            result = self._apply_mutation(pool, event)
            if result is not None:
                return result

        if not event.fetch_completed or not event.response_kind:
            return pool
        return self._apply_response(pool, event)

    def _add(self, records: list[Record], pool: RecordPool) -> RecordPool:
        return add_records(
            records,
            pool,
            now=self._clock(),
            ttl=self._ttl,
            strictly_forward=self._config.strictly_forward,
        )

    def _apply_mutation(self, pool: RecordPool, event: PoolEvent) -> RecordPool | None:
        kind = event.mutation_kind

        if kind in (MutationKind.UPDATE, MutationKind.MOVE):
            target_id = event.target_id if event.target_id is not None else safe_identifier(event.data.get("id"))
            if target_id is None:
                _logger.debug("Ignoring %s without a target id", kind)
                return pool
            updated = _merged(pool, target_id, event.data)
            siblings: list[Record] = []
            if event.position_field and event.parent_field:
                siblings = _shifted_siblings(pool, updated, event.parent_field, event.position_field)
            # The moved record goes last so a stale copy can never win the merge.
            return self._add([*siblings, updated], pool)

        if kind == MutationKind.UPDATE_MANY:
            updated_records = [_merged(pool, record_id, event.data) for record_id in event.target_ids]
            return self._add(updated_records, pool)

        if kind == MutationKind.DELETE:
            if event.target_id is None:
                return pool
            return remove_records([event.target_id], pool)

        if kind == MutationKind.DELETE_MANY:
            return remove_records(event.target_ids, pool)

        _logger.debug("Ignoring unknown optimistic mutation kind %r", kind)
        return None

    def _apply_response(self, pool: RecordPool, event: PoolEvent) -> RecordPool:
        kind = event.response_kind
        if kind in BULK_RESPONSE_KINDS:
            items = as_record_list(event.result)
        elif kind in SINGLE_RESPONSE_KINDS:
            items = [event.result]
        else:
            _logger.debug("Ignoring unknown response kind %r", kind)
            return pool

        records, rejected = split_records(items)
        if rejected:
            _logger.debug("Skipping %d %s result(s) without an id", len(rejected), kind)
        return self._add(records, pool)


_default_reducer = RecordPoolReducer()


def reduce(pool: RecordPool | None, event: Any) -> RecordPool:
    """Reduce one event with the default configuration."""
    return _default_reducer(pool, event)
