"""
Replay runner: rebuild a collection from a sequence of raw messages.

Replay is pure: routes each message by stream name and folds it into the
collection in the order given.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.binding import ErrorHook, apply_binding_event, apply_initial_load
from ..core.collection import Collection
from ..core.demux import classifier_from_mapping, classify_stream
from ..core.envelope import Raw
from ..core.handler import InitialStreamHandler, StreamHandler
from .. import metrics

_BINDING = "binding"
_INITIAL = "initial"
_SKIP = "skip"


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        collection: Final collection
        applied: Number of binding messages handed to apply_binding_event
        initial_loads: Number of initial-load messages applied
        skipped: Number of messages for other streams or without a stream
    """
    collection: Collection
    applied: int
    initial_loads: int
    skipped: int


def replay(
    messages: Iterable[Raw],
    handler: StreamHandler,
    initial_handler: Optional[InitialStreamHandler] = None,
    collection: Optional[Collection] = None,
    on_error: Optional[ErrorHook] = None,
) -> ReplayResult:
    """
    Fold raw messages into a collection.

    Messages on initial_handler.stream replace the collection; messages on
    handler.stream are applied as binding events; anything else is skipped.

    Args:
        messages: Raw messages in arrival order
        handler: Binding stream handler
        initial_handler: Initial-load handler (None = no initial stream)
        collection: Starting collection (None = empty)
        on_error: Passed to every decode-consuming call

    Returns:
        ReplayResult with final collection and counts

    Raises:
        ValueError: If both handlers name the same stream
    """
    routes = {handler.stream: _BINDING}
    if initial_handler is not None:
        if initial_handler.stream == handler.stream:
            raise ValueError(f"initial and binding handlers share stream {handler.stream!r}")
        routes[initial_handler.stream] = _INITIAL
    classify = classifier_from_mapping(routes, _SKIP)

    current = [] if collection is None else collection
    applied = initial_loads = skipped = 0

    for raw in messages:
        route = classify_stream(raw, classify, _SKIP, on_error=on_error)
        if route == _BINDING:
            current = apply_binding_event(handler, raw, current, on_error=on_error)
            applied += 1
        elif route == _INITIAL:
            current = apply_initial_load(initial_handler, raw, on_error=on_error)
            initial_loads += 1
        else:
            metrics.track_ignored("unknown_stream")
            skipped += 1

    return ReplayResult(
        collection=current,
        applied=applied,
        initial_loads=initial_loads,
        skipped=skipped,
    )
