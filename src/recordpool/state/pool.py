"""Record pool value type.

A pool is two sibling maps that always share one key set:

* ``records``: identifier -> record dict
* ``fetched_at``: identifier -> UTC timestamp of the last confirmed refresh

Keeping the freshness metadata in its own map means anything that walks
``records`` only ever sees records.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

Identifier = int | str
Record = dict[str, Any]

# Key the dispatcher registers the reducer under.
POOL_STATE_KEY = "data"


class RecordPool(BaseModel):
    """Immutable snapshot of every known record plus its refresh time.

    Callers must not mutate the record dicts handed out by a pool; the
    reducer builds a new pool for every change.
    """

    model_config = ConfigDict(frozen=True)

    records: dict[Identifier, Record] = Field(default_factory=dict)
    fetched_at: dict[Identifier, datetime] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_key_sets(self) -> RecordPool:
        """Every record has a timestamp and every timestamp has a record."""
        if self.records.keys() != self.fetched_at.keys():
            missing = sorted(map(str, self.records.keys() ^ self.fetched_at.keys()))
            raise ValueError(f"records and fetched_at key sets differ: {missing}")
        return self

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self.records

    def ids(self) -> list[Identifier]:
        return list(self.records)

    def iter_records(self) -> Iterator[Record]:
        """Yield records only, never freshness metadata."""
        yield from self.records.values()


def empty_pool() -> RecordPool:
    return RecordPool()


def get_record(pool: RecordPool, record_id: Identifier) -> Record | None:
    """Look up one record by identifier."""
    return pool.records.get(record_id)


def get_fetched_at(pool: RecordPool, record_id: Identifier) -> datetime | None:
    return pool.fetched_at.get(record_id)
