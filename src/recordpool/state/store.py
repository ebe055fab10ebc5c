"""In-memory holder for the current record pool.

The reducer itself is stateless; this store is the thin piece of state a
caller needs to thread one pool through a sequence of events.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from recordpool.state.pool import Identifier, Record, RecordPool, empty_pool, get_fetched_at, get_record
from recordpool.state.reducer import RecordPoolReducer


class RecordStore:
    """Single-threaded store that replaces its pool on every event."""

    def __init__(
        self,
        *,
        reducer: RecordPoolReducer | None = None,
        pool: RecordPool | None = None,
    ) -> None:
        self._reducer = reducer or RecordPoolReducer()
        self._pool = pool if pool is not None else empty_pool()

    @property
    def pool(self) -> RecordPool:
        return self._pool

    def apply(self, event: Any) -> RecordPool:
        """Reduce *event* into the held pool and return the new pool."""
        self._pool = self._reducer(self._pool, event)
        return self._pool

    def get_record(self, record_id: Identifier) -> Record | None:
        return get_record(self._pool, record_id)

    def get_fetched_at(self, record_id: Identifier) -> datetime | None:
        return get_fetched_at(self._pool, record_id)
