"""
Stream demultiplexer.

Reads only the top-level "stream" field of a raw message and maps it to an
application-defined tag. The payload is never decoded here.
"""

import logging
from typing import Any, Callable, Mapping, Optional, TypeVar

from .. import metrics
from .canonical import parse_message
from .envelope import Raw
from .errors import DecodeError

logger = logging.getLogger(__name__)

Tag = TypeVar("Tag")

ErrorHook = Callable[[DecodeError], None]


def _stream_field(raw: Raw) -> str:
    obj = parse_message(raw)
    if not isinstance(obj, dict):
        raise DecodeError("message is not a JSON object", raw=raw)
    if "stream" not in obj:
        raise DecodeError("missing field", field="stream", raw=raw)
    stream = obj["stream"]
    if not isinstance(stream, str):
        raise DecodeError(f"expected string, got {type(stream).__name__}", field="stream", raw=raw)
    return stream


def extract_stream_name(raw: Raw) -> Optional[str]:
    """
    Return the message's stream name, or None if it has none.

    Never raises: invalid JSON, a non-object message, or a missing or
    non-string "stream" field all yield None.
    """
    try:
        return _stream_field(raw)
    except DecodeError:
        return None


def classify_stream(
    raw: Raw,
    classify: Callable[[str], Tag],
    fallback: Tag,
    on_error: Optional[ErrorHook] = None,
) -> Tag:
    """
    Route a raw message to a tag.

    Args:
        raw: Message text
        classify: Stream name -> tag (totality is the caller's concern)
        fallback: Tag for messages without a usable stream name
        on_error: Optional hook called with the DecodeError before falling back

    Returns:
        classify(stream) or fallback
    """
    try:
        stream = _stream_field(raw)
    except DecodeError as e:
        logger.debug("Unroutable message (%s): %s", e.field or "message", e)
        metrics.track_decode_error("classify")
        if on_error is not None:
            on_error(e)
        return fallback

    return classify(stream)


def classifier_from_mapping(mapping: Mapping[str, Any], fallback: Any) -> Callable[[str], Any]:
    """
    Build a total classifier from a {stream name: tag} mapping.

    Usage:
        classify = classifier_from_mapping({"todo": Route.TODO}, Route.UNKNOWN)
        tag = classify_stream(raw, classify, Route.UNKNOWN)
    """
    table = dict(mapping)

    def classify(stream: str) -> Any:
        return table.get(stream, fallback)

    return classify
