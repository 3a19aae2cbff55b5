"""
Envelope codec: decode and encode the wire envelope.

Wire shape:
    {"stream": <name>, "payload": {"model": ..., "data": ..., "pk": ..., "action": ...}}

Initial-load streams carry a list of {"model", "data", "pk"} objects as the
payload instead.

Decoding raises DecodeError; callers that must never raise (the binding
reducer, the demultiplexer) catch it and fall back.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

from .canonical import compact_json_str, parse_message
from .errors import DecodeError

PK = TypeVar("PK")
T = TypeVar("T")

# Value codec signatures: JSON value -> typed value, typed value -> JSON value
Decoder = Callable[[Any], Any]
Encoder = Callable[[Any], Any]

Raw = Union[str, bytes]

# Default for omitted pk/data in encode_binding_envelope; None is a valid value.
MISSING = object()


class Action(str, Enum):
    """Binding actions understood by the server."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Payload fields sent per action, in wire order.
OUTBOUND_FIELDS: Dict[Action, tuple] = {
    Action.CREATE: ("action", "data"),
    Action.UPDATE: ("pk", "action", "data"),
    Action.DELETE: ("pk", "action"),
}


@dataclass(frozen=True)
class BindingPayload(Generic[PK, T]):
    """
    Decoded payload of a binding message.

    Fields:
        action: Action string as sent (not validated against Action)
        pk: Decoded primary key (None only in lenient mode for create)
        data: Decoded instance (None only in lenient mode for delete)
        model: Model name, informational
    """
    action: str
    pk: Optional[PK] = None
    data: Optional[T] = None
    model: Optional[str] = None


@dataclass(frozen=True)
class InitialItem(Generic[PK, T]):
    """One item of an initial-load payload."""
    model: str
    data: T
    pk: PK


def _payload_object(obj: Any, raw: Raw) -> Any:
    if not isinstance(obj, dict):
        raise DecodeError("message is not a JSON object", raw=raw)
    if "payload" not in obj:
        raise DecodeError("missing field", field="payload", raw=raw)
    return obj["payload"]


def _require_str(obj: Dict[str, Any], key: str, path: str, raw: Raw) -> str:
    if key not in obj:
        raise DecodeError("missing field", field=path, raw=raw)
    value = obj[key]
    if not isinstance(value, str):
        raise DecodeError(f"expected string, got {type(value).__name__}", field=path, raw=raw)
    return value


def _decode_with(decoder: Decoder, value: Any, path: str, raw: Raw) -> Any:
    try:
        return decoder(value)
    except DecodeError:
        raise
    except Exception as e:
        # Decoders are user code; any failure on a wire value is a decode failure.
        raise DecodeError(f"invalid value: {e}", field=path, raw=raw) from e


def decode_binding_envelope(
    raw: Raw,
    instance_decoder: Decoder,
    pk_decoder: Decoder,
    strict: bool = True,
) -> BindingPayload:
    """
    Decode a binding message.

    Strict mode (inbound server messages) requires payload.model (str),
    payload.data, payload.pk and payload.action (str).

    Lenient mode accepts exactly what the outbound encoder produces:
    action always, pk for update/delete, data for create/update, model
    optional. Fields not required for the action are decoded when present.

    Args:
        raw: Message text
        instance_decoder: JSON value -> instance
        pk_decoder: JSON value -> primary key
        strict: Require all four payload fields

    Returns:
        BindingPayload

    Raises:
        DecodeError: On invalid JSON, missing fields, or decoder failure
    """
    payload = _payload_object(parse_message(raw), raw)
    if not isinstance(payload, dict):
        raise DecodeError("expected object", field="payload", raw=raw)

    action = _require_str(payload, "action", "payload.action", raw)

    if strict:
        model = _require_str(payload, "model", "payload.model", raw)
        need_pk = need_data = True
    else:
        model = None
        if "model" in payload:
            model = _require_str(payload, "model", "payload.model", raw)
        need_pk = action in (Action.UPDATE.value, Action.DELETE.value)
        need_data = action in (Action.CREATE.value, Action.UPDATE.value)

    pk = None
    if "pk" in payload:
        pk = _decode_with(pk_decoder, payload["pk"], "payload.pk", raw)
    elif need_pk:
        raise DecodeError("missing field", field="payload.pk", raw=raw)

    data = None
    if "data" in payload:
        data = _decode_with(instance_decoder, payload["data"], "payload.data", raw)
    elif need_data:
        raise DecodeError("missing field", field="payload.data", raw=raw)

    return BindingPayload(action=action, pk=pk, data=data, model=model)


def decode_initial_envelope(
    raw: Raw,
    instance_decoder: Decoder,
    pk_decoder: Decoder,
) -> List[InitialItem]:
    """
    Decode an initial-load message.

    The payload must be a list of objects, each with model (str), data and
    pk. Items are returned in wire order.

    Raises:
        DecodeError: On invalid JSON, a non-list payload, or any bad item
    """
    payload = _payload_object(parse_message(raw), raw)
    if not isinstance(payload, list):
        raise DecodeError("expected list", field="payload", raw=raw)

    items = []
    for i, entry in enumerate(payload):
        path = f"payload[{i}]"
        if not isinstance(entry, dict):
            raise DecodeError("expected object", field=path, raw=raw)
        model = _require_str(entry, "model", f"{path}.model", raw)
        if "data" not in entry:
            raise DecodeError("missing field", field=f"{path}.data", raw=raw)
        if "pk" not in entry:
            raise DecodeError("missing field", field=f"{path}.pk", raw=raw)
        data = _decode_with(instance_decoder, entry["data"], f"{path}.data", raw)
        pk = _decode_with(pk_decoder, entry["pk"], f"{path}.pk", raw)
        items.append(InitialItem(model=model, data=data, pk=pk))

    return items


def encode_binding_envelope(
    stream: str,
    action: Union[Action, str],
    pk: Any = MISSING,
    data: Any = MISSING,
    pk_encoder: Encoder = None,
    instance_encoder: Encoder = None,
) -> str:
    """
    Encode an outbound binding message as compact JSON text.

    Payload fields by action (and nothing else):
        create: {action, data}
        update: {pk, action, data}
        delete: {pk, action}

    Args:
        stream: Stream name
        action: Action (enum member or its string value)
        pk: Primary key (update, delete); None is sent as JSON null
        data: Instance (create, update); None is sent as JSON null
        pk_encoder: primary key -> JSON value (default: unchanged)
        instance_encoder: instance -> JSON value (default: unchanged)

    Raises:
        ValueError: Unknown action, or a required pk/data was not given
    """
    action = Action(action)

    values = {"action": action.value}
    for name in OUTBOUND_FIELDS[action]:
        if name == "pk":
            if pk is MISSING:
                raise ValueError(f"{action.value} message requires a pk")
            values["pk"] = pk_encoder(pk) if pk_encoder else pk
        elif name == "data":
            if data is MISSING:
                raise ValueError(f"{action.value} message requires data")
            values["data"] = instance_encoder(data) if instance_encoder else data

    payload = {name: values[name] for name in OUTBOUND_FIELDS[action]}
    return compact_json_str({"stream": stream, "payload": payload})
