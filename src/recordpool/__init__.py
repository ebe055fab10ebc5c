"""recordpool - Stale-while-revalidate record cache reducer."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("recordpool")
except PackageNotFoundError:
    __version__ = "0+local"
from recordpool.config import PoolConfig
from recordpool.exceptions import RecordPoolConfigError, RecordPoolError
from recordpool.ingestion.actions import event_from_action
from recordpool.state.events import MutationKind, PoolEvent, ResponseKind
from recordpool.state.pool import (
    POOL_STATE_KEY,
    Identifier,
    Record,
    RecordPool,
    empty_pool,
    get_fetched_at,
    get_record,
)
from recordpool.state.reducer import RecordPoolReducer, add_records, reduce, remove_records
from recordpool.state.store import RecordStore

__all__ = [
    "__version__",
    "Identifier",
    "MutationKind",
    "POOL_STATE_KEY",
    "PoolConfig",
    "PoolEvent",
    "Record",
    "RecordPool",
    "RecordPoolConfigError",
    "RecordPoolError",
    "RecordPoolReducer",
    "RecordStore",
    "ResponseKind",
    "add_records",
    "empty_pool",
    "event_from_action",
    "get_fetched_at",
    "get_record",
    "reduce",
    "remove_records",
]
