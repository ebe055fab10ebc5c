"""Normalized pool events.

Dispatcher actions are converted into these events (see
:mod:`recordpool.ingestion.actions`). Only the reducer interprets them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from recordpool.state.pool import Identifier


class MutationKind(StrEnum):
    UPDATE = "update"
    UPDATE_MANY = "update-many"
    DELETE = "delete"
    DELETE_MANY = "delete-many"
    MOVE = "move"


class ResponseKind(StrEnum):
    ROOT_NODES = "root-nodes"
    CHILDREN_NODES = "children-nodes"
    LIST = "list"
    MANY = "many"
    MANY_BY_REFERENCE = "many-by-reference"
    GET_ONE = "get-one"
    UPDATE = "update"
    CREATE = "create"


BULK_RESPONSE_KINDS: frozenset[str] = frozenset(
    kind.value
    for kind in (
        ResponseKind.ROOT_NODES,
        ResponseKind.CHILDREN_NODES,
        ResponseKind.LIST,
        ResponseKind.MANY,
        ResponseKind.MANY_BY_REFERENCE,
    )
)
SINGLE_RESPONSE_KINDS: frozenset[str] = frozenset(
    kind.value for kind in (ResponseKind.GET_ONE, ResponseKind.UPDATE, ResponseKind.CREATE)
)


class PoolEvent(BaseModel):
    """Either an optimistic mutation or a settled fetch response.

    ``mutation_kind`` and ``response_kind`` are kept as plain strings so that
    kinds this library does not know about still make a valid event; the
    reducer ignores them.
    """

    model_config = ConfigDict(frozen=True)

    optimistic: bool = False
    mutation_kind: str | None = None
    target_id: Identifier | None = None
    target_ids: list[Identifier] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict, description="Partial record fields to merge")
    parent_field: str | None = Field(default=None, description="Parent-reference field name (move only)")
    position_field: str | None = Field(default=None, description="Sibling position field name (move only)")

    fetch_completed: bool = False
    response_kind: str | None = None
    result: Any = Field(default=None, description="Fetched record, or list of records for bulk kinds")

    @classmethod
    def mutation(
        cls,
        kind: MutationKind | str,
        *,
        target_id: Identifier | None = None,
        target_ids: list[Identifier] | None = None,
        data: dict[str, Any] | None = None,
        parent_field: str | None = None,
        position_field: str | None = None,
    ) -> PoolEvent:
        return cls(
            optimistic=True,
            mutation_kind=str(kind),
            target_id=target_id,
            target_ids=target_ids or [],
            data=data or {},
            parent_field=parent_field,
            position_field=position_field,
        )

    @classmethod
    def response(cls, kind: ResponseKind | str, result: Any, *, completed: bool = True) -> PoolEvent:
        return cls(fetch_completed=completed, response_kind=str(kind), result=result)
