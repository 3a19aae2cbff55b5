"""
Tests for reducer purity and ordering.

Critical: reducers must not mutate their input and must keep positions.
"""

from streambind.core.collection import (
    append_create,
    dedup_create,
    default_create,
    default_delete,
    default_update,
)


def _todos():
    return [
        ("1", {"description": "a", "is_done": False}),
        ("2", {"description": "b", "is_done": True}),
        ("3", {"description": "c", "is_done": False}),
    ]


def test_create_prepends():
    """New pair goes first, prior pairs keep their order."""
    c0 = _todos()
    c1 = default_create({"description": "d", "is_done": False}, "4", c0)

    assert c1[0] == ("4", {"description": "d", "is_done": False})
    assert c1[1:] == _todos()


def test_create_on_empty():
    assert default_create("x", 1, []) == [(1, "x")]


def test_create_keeps_duplicate_key():
    """Create on an existing key inserts a second entry."""
    c1 = default_create({"description": "again"}, "2", _todos())

    assert len(c1) == 4
    assert [pk for pk, _ in c1] == ["2", "1", "2", "3"]


def test_create_does_not_mutate_input():
    c0 = _todos()
    default_create({"description": "d"}, "4", c0)
    assert c0 == _todos()


def test_update_replaces_in_place():
    """Only the matching pair changes; length and positions are preserved."""
    new = {"description": "B", "is_done": False}
    c1 = default_update(new, "2", _todos())

    assert len(c1) == 3
    assert c1[0] == _todos()[0]
    assert c1[1] == ("2", new)
    assert c1[2] == _todos()[2]


def test_update_replaces_every_match():
    c0 = [("1", "a"), ("2", "b"), ("1", "c")]
    assert default_update("z", "1", c0) == [("1", "z"), ("2", "b"), ("1", "z")]


def test_update_absent_key_unchanged():
    """No implicit insert; the same collection comes back."""
    c0 = _todos()
    c1 = default_update({"description": "x"}, "99", c0)

    assert c1 == c0
    assert c1 is c0


def test_update_does_not_mutate_input():
    c0 = _todos()
    default_update({"description": "x"}, "1", c0)
    assert c0 == _todos()


def test_delete_removes_key():
    c1 = default_delete("2", _todos())
    assert c1 == [_todos()[0], _todos()[2]]


def test_delete_removes_all_matches_keeping_order():
    c0 = [("1", "a"), ("2", "b"), ("1", "c"), ("3", "d")]
    c1 = default_delete("1", c0)

    assert c1 == [("2", "b"), ("3", "d")]
    assert all(pk != "1" for pk, _ in c1)


def test_delete_absent_key_unchanged():
    c0 = _todos()
    c1 = default_delete("99", c0)

    assert c1 == c0
    assert c1 is c0


def test_delete_does_not_mutate_input():
    c0 = _todos()
    default_delete("1", c0)
    assert c0 == _todos()


def test_keys_compared_by_equality():
    """Keys only need ==; tuples work as composite keys."""
    c0 = [(("org", 1), "a"), (("org", 2), "b")]
    assert default_delete(("org", 1), c0) == [(("org", 2), "b")]


def test_dedup_create_replaces_existing():
    c1 = dedup_create({"description": "new"}, "2", _todos())

    assert [pk for pk, _ in c1] == ["2", "1", "3"]
    assert c1[0] == ("2", {"description": "new"})


def test_dedup_create_new_key_same_as_default():
    assert dedup_create("x", "9", _todos()) == default_create("x", "9", _todos())


def test_append_create():
    c1 = append_create("x", "9", _todos())
    assert c1[:-1] == _todos()
    assert c1[-1] == ("9", "x")
