"""
Binding reducer: apply inbound events to a collection, build outbound messages.

Decode failures never raise out of this module. A malformed push message must
not break the client's update loop, so apply_binding_event returns the
collection unchanged and apply_initial_load returns an empty collection. Pass
on_error to observe the DecodeError; failures are also logged at DEBUG and
counted when metrics are initialized.
"""

import logging
from typing import Any, Callable, Optional

from .. import metrics
from .collection import Collection
from .envelope import (
    Action,
    MISSING,
    Raw,
    decode_binding_envelope,
    decode_initial_envelope,
    encode_binding_envelope,
)
from .errors import DecodeError
from .handler import InitialStreamHandler, StreamHandler

logger = logging.getLogger(__name__)

ErrorHook = Callable[[DecodeError], None]


def _report(operation: str, stream: str, error: DecodeError, on_error: Optional[ErrorHook]) -> None:
    logger.debug(
        "Dropped %s message on stream %s (%s): %s",
        operation,
        stream,
        error.field or "message",
        error,
    )
    metrics.track_decode_error(operation)
    if on_error is not None:
        on_error(error)


def apply_binding_event(
    handler: StreamHandler,
    raw: Raw,
    collection: Collection,
    on_error: Optional[ErrorHook] = None,
) -> Collection:
    """
    Apply one binding message to a collection.

    Args:
        handler: Stream handler (codecs and reducers)
        raw: Message text
        collection: Current collection
        on_error: Optional hook called with the DecodeError on decode failure

    Returns:
        The reducer's result for create/update/delete; the input collection
        itself for malformed messages and unknown actions
    """
    metrics.track_message(handler.stream)
    try:
        event = decode_binding_envelope(raw, handler.instance_decoder, handler.pk_decoder)
    except DecodeError as e:
        _report("binding", handler.stream, e, on_error)
        return collection

    if event.action == Action.CREATE.value:
        result = handler.create(event.data, event.pk, collection)
    elif event.action == Action.UPDATE.value:
        result = handler.update(event.data, event.pk, collection)
    elif event.action == Action.DELETE.value:
        result = handler.delete(event.pk, collection)
    else:
        logger.debug("Ignoring unknown action %r on stream %s", event.action, handler.stream)
        metrics.track_ignored("unknown_action")
        return collection

    metrics.track_applied(handler.stream, event.action)
    return result


def apply_initial_load(
    handler: InitialStreamHandler,
    raw: Raw,
    on_error: Optional[ErrorHook] = None,
) -> Collection:
    """
    Build a collection from an initial-load message.

    The result replaces any prior collection; items keep their wire order.

    Returns:
        List of (pk, data) pairs, or [] if the message fails to decode
    """
    metrics.track_message(handler.stream)
    try:
        items = decode_initial_envelope(raw, handler.instance_decoder, handler.pk_decoder)
    except DecodeError as e:
        _report("initial", handler.stream, e, on_error)
        return []

    return [(item.pk, item.data) for item in items]


def _build(handler: StreamHandler, action: Action, pk: Any = MISSING, data: Any = MISSING) -> str:
    text = encode_binding_envelope(
        handler.stream,
        action,
        pk=pk,
        data=data,
        pk_encoder=handler.pk_encoder,
        instance_encoder=handler.instance_encoder,
    )
    metrics.track_encoded(handler.stream, action.value)
    return text


def build_create_message(handler: StreamHandler, instance: Any) -> str:
    """Wire text asking the server to create instance (the server assigns the pk)."""
    return _build(handler, Action.CREATE, data=instance)


def build_update_message(handler: StreamHandler, pk: Any, instance: Any) -> str:
    """Wire text asking the server to replace the instance keyed pk."""
    return _build(handler, Action.UPDATE, pk=pk, data=instance)


def build_delete_message(handler: StreamHandler, pk: Any) -> str:
    """Wire text asking the server to delete the instance keyed pk."""
    return _build(handler, Action.DELETE, pk=pk)
