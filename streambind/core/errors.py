"""
Exception types for stream binding.
"""

from typing import Optional, Union


class StreamBindError(Exception):
    """Base class for stream binding errors."""
    pass


class DecodeError(StreamBindError):
    """
    Raised when an envelope cannot be decoded.

    Covers invalid JSON, missing required fields, and type mismatches.
    Decode-consuming operations catch it and return their fallback value.

    Fields:
        field: Dotted path of the failing field (e.g. "payload.pk"), or None
        raw: The message text being decoded
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        raw: Union[str, bytes, None] = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.raw = raw
