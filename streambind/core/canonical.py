"""
Compact JSON serialization for the wire.

All outbound messages go through these functions so that every encoder
produces identical text for identical input.
"""

import json
from typing import Any, Union

from .errors import DecodeError


def compact_json_str(obj: Any) -> str:
    """
    Compact JSON text for transmission.

    Guarantees:
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - key order preserved (never sorted; payload field order is part of
      the wire contract with the server)
    """
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def compact_json_bytes(obj: Any) -> bytes:
    """Same as compact_json_str but UTF-8 encoded."""
    return compact_json_str(obj).encode("utf-8")


def parse_message(raw: Union[str, bytes]) -> Any:
    """
    Parse raw message text into a JSON value.

    Raises:
        DecodeError: If raw is not valid JSON text
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"message is not UTF-8: {e}", raw=raw) from e

    if not isinstance(raw, str):
        raise DecodeError(f"message must be text, got {type(raw).__name__}", raw=raw)

    # Deep nesting exhausts the scanner's recursion limit before it finds
    # a syntax problem.
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"invalid JSON: {e}", raw=raw) from e
