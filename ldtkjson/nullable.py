"""Required-but-nullable keys.

Several keys in the format must always be written but may hold ``null``:
``__bgPos``, ``__tile``, ``__tilesetDefUid``, ``__value`` and friends. Decoding
such a key has two valid outcomes, the decoded data or ``None`` for absent;
neither is an error. A key that is missing altogether still is.
"""

from typing import Any, Callable, Mapping, Optional, TypeVar

from ldtkjson.values import required_field

T = TypeVar("T")


def decode_nullable(value: Any, decode: Callable[[Any], T]) -> Optional[T]:
    if value is None:
        return None
    return decode(value)


def encode_nullable(value: Optional[T], encode: Callable[[T], Any]) -> Any:
    if value is None:
        return None
    return encode(value)


def nullable_field(
    payload: Mapping[str, Any],
    key: str,
    decode: Callable[[Any], T],
) -> Optional[T]:
    return required_field(payload, key, lambda value: decode_nullable(value, decode))
