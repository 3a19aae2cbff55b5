"""
Tests for stream routing.

Critical: routing never raises and never needs the payload.
"""

from enum import Enum

import pytest

from streambind.core.demux import classifier_from_mapping, classify_stream, extract_stream_name


class Route(Enum):
    TODO = "todo"
    TODO_INITIAL = "todo_initial"
    UNKNOWN = "unknown"


def classify(stream):
    if stream == "todo":
        return Route.TODO
    if stream == "todo_initial":
        return Route.TODO_INITIAL
    return Route.UNKNOWN


def test_classify_known_stream():
    raw = '{"stream":"todo","payload":{"model":"todo","data":{},"pk":"1","action":"create"}}'
    assert classify_stream(raw, classify, Route.UNKNOWN) == classify("todo")


def test_classify_delegates_unknown_names_to_classifier():
    """Names the classifier does not know are still the classifier's call."""
    assert classify_stream('{"stream":"chat"}', classify, None) == Route.UNKNOWN


def test_classify_missing_stream_uses_fallback():
    assert classify_stream('{"payload":[]}', classify, "fallback") == "fallback"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "garbage",
        "[1, 2]",
        "null",
        '{"stream": 5}',
        '{"stream": null}',
        b"\xff\xfe",
        pytest.param('{"stream":"todo","payload":' + "[" * 100000 + "]" * 100000 + "}", id="deeply-nested"),
    ],
)
def test_classify_malformed_uses_fallback(raw):
    assert classify_stream(raw, classify, "fallback") == "fallback"


def test_classify_does_not_decode_payload():
    """A broken payload does not affect routing."""
    raw = '{"stream":"todo","payload":"not an object"}'
    assert classify_stream(raw, classify, Route.UNKNOWN) == Route.TODO


def test_classify_error_hook():
    """on_error sees the DecodeError; the result is still the fallback."""
    errors = []
    result = classify_stream('{"payload":{}}', classify, Route.UNKNOWN, on_error=errors.append)

    assert result == Route.UNKNOWN
    assert len(errors) == 1
    assert errors[0].field == "stream"


def test_classify_hook_not_called_on_success():
    errors = []
    classify_stream('{"stream":"todo"}', classify, Route.UNKNOWN, on_error=errors.append)
    assert errors == []


def test_extract_stream_name():
    assert extract_stream_name('{"stream":"todo","payload":[]}') == "todo"
    assert extract_stream_name(b'{"stream":"todo"}') == "todo"


@pytest.mark.parametrize("raw", ["", "{", "[]", '{"payload":{}}', '{"stream":["todo"]}'])
def test_extract_stream_name_none(raw):
    assert extract_stream_name(raw) is None


def test_classifier_from_mapping():
    classify_map = classifier_from_mapping({"todo": Route.TODO}, Route.UNKNOWN)

    assert classify_map("todo") == Route.TODO
    assert classify_map("other") == Route.UNKNOWN
    assert classify_stream('{"stream":"todo"}', classify_map, Route.UNKNOWN) == Route.TODO


def test_classifier_from_mapping_copies_table():
    """Later changes to the source mapping do not leak in."""
    table = {"todo": Route.TODO}
    classify_map = classifier_from_mapping(table, Route.UNKNOWN)
    table["chat"] = Route.TODO

    assert classify_map("chat") == Route.UNKNOWN
