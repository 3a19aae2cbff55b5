"""
Per-stream handler records.

A handler bundles the value codecs and reducers for one logical stream. It is
plain configuration: built once at startup, immutable, passed into every call.
The application keeps its own stream -> handler lookup.
"""

from dataclasses import dataclass
from typing import Any, Callable

from .collection import (
    CreateReducer,
    DeleteReducer,
    UpdateReducer,
    default_create,
    default_delete,
    default_update,
)
from .envelope import Decoder, Encoder


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class StreamHandler:
    """
    Handler for a binding stream (create/update/delete events).

    Fields:
        stream: Wire stream name (used by the outbound builders)
        instance_decoder: JSON value -> instance
        instance_encoder: instance -> JSON value
        pk_decoder: JSON value -> primary key
        pk_encoder: primary key -> JSON value
        create: (instance, pk, collection) -> collection
        update: (instance, pk, collection) -> collection
        delete: (pk, collection) -> collection
    """
    stream: str
    instance_decoder: Decoder = _identity
    instance_encoder: Encoder = _identity
    pk_decoder: Decoder = _identity
    pk_encoder: Encoder = _identity
    create: CreateReducer = default_create
    update: UpdateReducer = default_update
    delete: DeleteReducer = default_delete


@dataclass(frozen=True)
class InitialStreamHandler:
    """
    Handler for an initial-load stream (one bulk snapshot, no actions).

    Fields:
        stream: Wire stream name
        instance_decoder: JSON value -> instance
        pk_decoder: JSON value -> primary key
    """
    stream: str
    instance_decoder: Decoder = _identity
    pk_decoder: Decoder = _identity


def with_reducers(handler: StreamHandler, **reducers: Callable) -> StreamHandler:
    """
    Return a copy of handler with some reducers swapped.

    Usage:
        handler = with_reducers(handler, create=dedup_create)
    """
    unknown = set(reducers) - {"create", "update", "delete"}
    if unknown:
        raise ValueError(f"unknown reducer(s): {', '.join(sorted(unknown))}")
    fields = {
        "stream": handler.stream,
        "instance_decoder": handler.instance_decoder,
        "instance_encoder": handler.instance_encoder,
        "pk_decoder": handler.pk_decoder,
        "pk_encoder": handler.pk_encoder,
        "create": handler.create,
        "update": handler.update,
        "delete": handler.delete,
    }
    fields.update(reducers)
    return StreamHandler(**fields)
