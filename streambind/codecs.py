"""
Ready-made value codecs for StreamHandler fields.

Decoders raise ValueError/TypeError on bad input; the envelope codec turns
that into a DecodeError with the field path.
"""

from typing import Any, Callable, Tuple, Type, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def identity(value: Any) -> Any:
    """Accept any JSON value unchanged (decoder and encoder)."""
    return value


def string_pk(value: Any) -> str:
    """Decode a string primary key."""
    if not isinstance(value, str):
        raise TypeError(f"expected string pk, got {type(value).__name__}")
    return value


def int_pk(value: Any) -> int:
    """Decode an integer primary key (booleans rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer pk, got {type(value).__name__}")
    return value


def model_codec(model_cls: Type[M]) -> Tuple[Callable[[Any], M], Callable[[M], Any]]:
    """
    Build (decoder, encoder) for a pydantic model.

    Usage:
        class Todo(BaseModel):
            description: str
            is_done: bool = False

        decode_todo, encode_todo = model_codec(Todo)
        handler = StreamHandler(
            stream="todo",
            instance_decoder=decode_todo,
            instance_encoder=encode_todo,
            pk_decoder=string_pk,
        )
    """

    def decode(value: Any) -> M:
        return model_cls.model_validate(value)

    def encode(instance: M) -> Any:
        return instance.model_dump(mode="json")

    return decode, encode
