"""
Core stream binding primitives.

This module provides the pure data-transform surface:
- Envelope: Wire decode/encode
- Demux: Stream name extraction and routing
- Collection: Default create/update/delete reducers
- Handler: Per-stream configuration records
- Binding: Apply inbound events, build outbound messages
"""

from .errors import StreamBindError, DecodeError
from .canonical import compact_json_str, compact_json_bytes, parse_message
from .envelope import (
    Action,
    BindingPayload,
    MISSING,
    InitialItem,
    decode_binding_envelope,
    decode_initial_envelope,
    encode_binding_envelope,
)
from .demux import classify_stream, extract_stream_name, classifier_from_mapping
from .collection import (
    Collection,
    default_create,
    default_update,
    default_delete,
    dedup_create,
    append_create,
)
from .handler import StreamHandler, InitialStreamHandler, with_reducers
from .binding import (
    apply_binding_event,
    apply_initial_load,
    build_create_message,
    build_update_message,
    build_delete_message,
)

__all__ = [
    "StreamBindError",
    "DecodeError",
    "compact_json_str",
    "compact_json_bytes",
    "parse_message",
    "Action",
    "BindingPayload",
    "MISSING",
    "InitialItem",
    "decode_binding_envelope",
    "decode_initial_envelope",
    "encode_binding_envelope",
    "classify_stream",
    "extract_stream_name",
    "classifier_from_mapping",
    "Collection",
    "default_create",
    "default_update",
    "default_delete",
    "dedup_create",
    "append_create",
    "StreamHandler",
    "InitialStreamHandler",
    "with_reducers",
    "apply_binding_event",
    "apply_initial_load",
    "build_create_message",
    "build_update_message",
    "build_delete_message",
]
