from __future__ import annotations

from datetime import UTC, datetime

from recordpool import MutationKind, RecordPoolReducer, ResponseKind, event_from_action, get_record


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def test_optimistic_move_action() -> None:
    event = event_from_action(
        {
            "type": "RA/TREE/MOVE_NODE_OPTIMISTIC",
            "payload": {"id": 4, "data": {"parent_id": 1, "position": 0}},
            "meta": {
                "optimistic": True,
                "fetch": "MOVE_NODE",
                "parentSource": "parent_id",
                "positionSource": "position",
            },
        }
    )

    assert event is not None
    assert event.optimistic is True
    assert event.mutation_kind == MutationKind.MOVE
    assert event.target_id == 4
    assert event.data == {"parent_id": 1, "position": 0}
    assert event.parent_field == "parent_id"
    assert event.position_field == "position"


def test_optimistic_many_action_keeps_only_identifiers() -> None:
    event = event_from_action(
        {
            "type": "RA/CRUD_DELETE_MANY_OPTIMISTIC",
            "payload": {"ids": [1, "2", None, {"id": 3}]},
            "meta": {"optimistic": True, "fetch": "DELETE_MANY"},
        }
    )

    assert event is not None
    assert event.mutation_kind == MutationKind.DELETE_MANY
    assert event.target_ids == [1, "2"]


def test_fetch_end_action() -> None:
    event = event_from_action(
        {
            "type": "RA/CRUD_GET_LIST_SUCCESS",
            "payload": {"data": [{"id": 1}], "total": 1},
            "meta": {"fetchResponse": "GET_LIST", "fetchStatus": "FETCH_END"},
        }
    )

    assert event is not None
    assert event.optimistic is False
    assert event.fetch_completed is True
    assert event.response_kind == ResponseKind.LIST
    assert event.result == [{"id": 1}]


def test_tree_verbs_are_mapped() -> None:
    roots = event_from_action({"meta": {"fetchResponse": "GET_TREE_ROOT_NODES", "fetchStatus": "FETCH_END"}})
    children = event_from_action({"meta": {"fetchResponse": "GET_TREE_CHILDREN_NODES", "fetchStatus": "FETCH_END"}})

    assert roots is not None and roots.response_kind == ResponseKind.ROOT_NODES
    assert children is not None and children.response_kind == ResponseKind.CHILDREN_NODES


def test_unknown_verbs_pass_through() -> None:
    event = event_from_action({"meta": {"optimistic": True, "fetch": "ARCHIVE"}, "payload": {"id": 1}})

    assert event is not None
    assert event.mutation_kind == "ARCHIVE"


def test_fetch_in_progress_is_not_completed() -> None:
    event = event_from_action({"meta": {"fetchResponse": "GET_ONE", "fetchStatus": "FETCH_START"}})

    assert event is not None
    assert event.fetch_completed is False


def test_non_mapping_action_is_rejected() -> None:
    assert event_from_action(None) is None
    assert event_from_action(["UPDATE"]) is None


def test_reducer_accepts_raw_actions() -> None:
    reducer = RecordPoolReducer(clock=_dt)
    pool = reducer(
        None,
        {
            "type": "RA/CRUD_GET_ONE_SUCCESS",
            "payload": {"data": {"id": 1, "title": "a"}},
            "meta": {"fetchResponse": "GET_ONE", "fetchStatus": "FETCH_END"},
        },
    )
    pool = reducer(
        pool,
        {
            "type": "RA/CRUD_UPDATE_OPTIMISTIC",
            "payload": {"id": 1, "data": {"title": "b"}},
            "meta": {"optimistic": True, "fetch": "UPDATE"},
        },
    )

    assert get_record(pool, 1) == {"id": 1, "title": "b"}

    untouched = reducer(pool, {"type": "RA/SET_SORT", "payload": {"field": "title"}})
    assert untouched == pool


def test_optimistic_action_keeps_response_fields() -> None:
    action = {
        "type": "RA/CUSTOM_ARCHIVE",
        "payload": {"id": 1, "data": {"id": 1}},
        "meta": {"optimistic": True, "fetch": "ARCHIVE", "fetchResponse": "GET_ONE", "fetchStatus": "FETCH_END"},
    }

    event = event_from_action(action)
    assert event is not None
    assert event.optimistic is True
    assert event.fetch_completed is True
    assert event.response_kind == ResponseKind.GET_ONE

    pool = RecordPoolReducer(clock=_dt)(None, action)
    assert get_record(pool, 1) == {"id": 1}
