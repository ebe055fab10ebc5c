"""Dispatcher action conversion.

Dispatchers deliver actions shaped as ``{"type", "payload", "meta"}``:

- optimistic mutations set ``meta.optimistic`` and name the verb in
  ``meta.fetch``; the target is ``payload.id`` / ``payload.ids`` and the
  partial fields are ``payload.data``. Move actions also carry
  ``meta.parentSource`` and ``meta.positionSource``.
- settled responses name the verb in ``meta.fetchResponse``, report
  ``meta.fetchStatus == "FETCH_END"`` and carry the result in ``payload.data``.

Verbs without a mapping are passed through as-is so the reducer can ignore
them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from recordpool.ingestion.normalize import as_mapping, safe_identifier, safe_identifiers, safe_str
from recordpool.state.events import MutationKind, PoolEvent, ResponseKind

_logger = logging.getLogger(__name__)

FETCH_END = "FETCH_END"

MUTATION_VERBS: dict[str, MutationKind] = {
    "UPDATE": MutationKind.UPDATE,
    "UPDATE_MANY": MutationKind.UPDATE_MANY,
    "DELETE": MutationKind.DELETE,
    "DELETE_MANY": MutationKind.DELETE_MANY,
    "MOVE_NODE": MutationKind.MOVE,
}

RESPONSE_VERBS: dict[str, ResponseKind] = {
    "GET_TREE_ROOT_NODES": ResponseKind.ROOT_NODES,
    "GET_TREE_CHILDREN_NODES": ResponseKind.CHILDREN_NODES,
    "GET_LIST": ResponseKind.LIST,
    "GET_MANY": ResponseKind.MANY,
    "GET_MANY_REFERENCE": ResponseKind.MANY_BY_REFERENCE,
    "GET_ONE": ResponseKind.GET_ONE,
    "UPDATE": ResponseKind.UPDATE,
    "CREATE": ResponseKind.CREATE,
}


def _kind(verb: Any, mapping: Mapping[str, str]) -> str | None:
    text = safe_str(verb)
    if text is None:
        return None
    return str(mapping.get(text, text))


def event_from_action(action: Any) -> PoolEvent | None:
    """Convert a dispatcher action into a :class:`PoolEvent`.

    Returns ``None`` when *action* is not a mapping or cannot be validated.
    """
    if not isinstance(action, Mapping):
        return None

    meta = as_mapping(action.get("meta"))
    payload = as_mapping(action.get("payload"))

    # Response fields are kept on optimistic actions too: an optimistic verb the
    # reducer does not handle falls through to the settled-response branch.
    fields: dict[str, Any] = {
        "fetch_completed": meta.get("fetchStatus") == FETCH_END,
        "response_kind": _kind(meta.get("fetchResponse"), RESPONSE_VERBS),
        "result": payload.get("data"),
    }
    if meta.get("optimistic"):
        fields.update(
            optimistic=True,
            mutation_kind=_kind(meta.get("fetch"), MUTATION_VERBS),
            target_id=safe_identifier(payload.get("id")),
            target_ids=safe_identifiers(payload.get("ids")),
            data=as_mapping(payload.get("data")),
            parent_field=safe_str(meta.get("parentSource")),
            position_field=safe_str(meta.get("positionSource")),
        )

    try:
        return PoolEvent(**fields)
    except ValidationError:
        _logger.debug("Failed to convert action type=%s", action.get("type"), exc_info=True)
        return None
