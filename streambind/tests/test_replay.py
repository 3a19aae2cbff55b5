"""
Tests for replay determinism.

Critical: replaying the same messages must produce the same collection.
"""

import json

import pytest

from streambind.core.handler import InitialStreamHandler, StreamHandler
from streambind.replay import replay


TODO = StreamHandler(stream="todo")
TODO_INITIAL = InitialStreamHandler(stream="todo_initial")


def _event(action, pk, data=None):
    return json.dumps({
        "stream": "todo",
        "payload": {"model": "todo", "data": data or {}, "pk": pk, "action": action},
    })


def _initial(*pairs):
    return json.dumps({
        "stream": "todo_initial",
        "payload": [{"model": "todo", "data": data, "pk": pk} for pk, data in pairs],
    })


def _messages():
    return [
        _initial(("1", {"d": "a"}), ("2", {"d": "b"})),
        _event("create", "3", {"d": "c"}),
        '{"stream":"chat","payload":{}}',
        _event("update", "1", {"d": "A"}),
        "garbage",
        _event("delete", "2"),
    ]


def test_replay_folds_messages():
    result = replay(_messages(), TODO, initial_handler=TODO_INITIAL)

    assert result.collection == [("3", {"d": "c"}), ("1", {"d": "A"})]
    assert result.initial_loads == 1
    assert result.applied == 3
    assert result.skipped == 2


def test_replay_determinism_100_runs():
    """Replay same messages 100 times must produce identical collections."""
    results = [json.dumps(replay(_messages(), TODO, initial_handler=TODO_INITIAL).collection) for _ in range(100)]
    assert len(set(results)) == 1


def test_replay_initial_load_replaces_collection():
    messages = [_event("create", "9", {"d": "z"}), _initial(("1", {"d": "a"}))]

    result = replay(messages, TODO, initial_handler=TODO_INITIAL, collection=[("0", {})])

    assert result.collection == [("1", {"d": "a"})]


def test_replay_without_initial_handler_skips_initial_stream():
    result = replay(_messages(), TODO)

    assert result.initial_loads == 0
    assert result.skipped == 3
    # update and delete target keys that were never loaded
    assert result.collection == [("3", {"d": "c"})]


def test_replay_empty():
    result = replay([], TODO)

    assert result.collection == []
    assert result.applied == 0


def test_replay_does_not_mutate_start_collection():
    start = [("1", {"d": "a"})]
    replay([_event("delete", "1")], TODO, collection=start)
    assert start == [("1", {"d": "a"})]


def test_replay_reports_decode_errors():
    errors = []
    replay(_messages(), TODO, initial_handler=TODO_INITIAL, on_error=errors.append)

    # "garbage" fails routing; nothing else is malformed
    assert len(errors) == 1


def test_replay_rejects_shared_stream_name():
    with pytest.raises(ValueError):
        replay([], TODO, initial_handler=InitialStreamHandler(stream="todo"))
