"""
Collection reducers: pure (event data, key, collection) -> collection functions.

A collection is an ordered list of (pk, instance) tuples. Reducers must be:
- Pure (never mutate the input list, no I/O)
- Deterministic (same input -> same output)

Keys are compared with ==, nothing else about PK or T is assumed.
"""

from typing import Callable, List, Tuple, TypeVar

PK = TypeVar("PK")
T = TypeVar("T")

Collection = List[Tuple[PK, T]]

# Reducer signatures
CreateReducer = Callable[[T, PK, Collection], Collection]
UpdateReducer = Callable[[T, PK, Collection], Collection]
DeleteReducer = Callable[[PK, Collection], Collection]


def default_create(instance: T, pk: PK, collection: Collection) -> Collection:
    """
    Prepend (pk, instance), newest first.

    An existing entry with the same key is NOT replaced: if the server sends a
    create for a key already in the collection, the result holds the key
    twice. Use dedup_create to replace instead.
    """
    return [(pk, instance)] + list(collection)


def default_update(instance: T, pk: PK, collection: Collection) -> Collection:
    """
    Replace the instance of every entry keyed pk, keeping positions.

    No matching entry: the collection is returned unchanged (no insert).
    """
    if not any(key == pk for key, _ in collection):
        return collection
    return [(key, instance) if key == pk else (key, value) for key, value in collection]


def default_delete(pk: PK, collection: Collection) -> Collection:
    """
    Remove every entry keyed pk, keeping the order of the rest.

    No matching entry: the collection is returned unchanged.
    """
    if not any(key == pk for key, _ in collection):
        return collection
    return [(key, value) for key, value in collection if key != pk]


def dedup_create(instance: T, pk: PK, collection: Collection) -> Collection:
    """Prepend (pk, instance) after dropping any existing entries keyed pk."""
    return [(pk, instance)] + [(key, value) for key, value in collection if key != pk]


def append_create(instance: T, pk: PK, collection: Collection) -> Collection:
    """Append (pk, instance), oldest first. Does not deduplicate."""
    return list(collection) + [(pk, instance)]
