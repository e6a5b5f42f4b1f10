from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar

from ldtkjson.errors import MissingFieldError, TypeMismatchError, decode_path_context

T = TypeVar("T")


class JsonObject(dict):
    """A decoded JSON object that also keeps every key/value pair in document order.

    ``json`` collapses repeated keys into one dict entry; keeping the raw pairs
    lets field instance decoding report duplicates. The pairs only describe the
    object while the dict still holds what was parsed, see :meth:`raw_pairs`.
    """

    def __init__(self, pairs: Iterable[Tuple[str, Any]] = ()):
        pairs = list(pairs)
        super().__init__(pairs)
        self.pairs = pairs

    def raw_pairs(self) -> Optional[List[Tuple[str, Any]]]:
        """Return the parsed pairs, or None once the dict has been edited."""
        pairs = getattr(self, "pairs", None)
        if pairs is None or dict(pairs) != dict(self):
            return None
        return list(pairs)


def iter_pairs(payload: Any) -> List[Tuple[str, Any]]:
    """List the key/value pairs of an object payload.

    ``payload`` is a mapping or a tuple of ``(key, value)`` pairs. A JSON array
    is never an object, so lists are rejected.
    """
    if isinstance(payload, JsonObject):
        pairs = payload.raw_pairs()
        return pairs if pairs is not None else list(payload.items())
    if isinstance(payload, Mapping):
        return list(payload.items())
    if isinstance(payload, tuple):
        out: List[Tuple[str, Any]] = []
        for item in payload:
            if not isinstance(item, tuple) or len(item) != 2 or not isinstance(item[0], str):
                raise TypeMismatchError("object", payload)
            out.append((item[0], item[1]))
        return out
    raise TypeMismatchError("object", payload)


def expect_object(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    raise TypeMismatchError("object", value)


def expect_int(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeMismatchError("integer", value)


def expect_number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise TypeMismatchError("number", value)


def expect_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise TypeMismatchError("bool", value)


def expect_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise TypeMismatchError("string", value)


def expect_list(value: Any, decode: Callable[[Any], T]) -> Tuple[T, ...]:
    if not isinstance(value, list):
        raise TypeMismatchError("array", value)
    out: List[T] = []
    for index, item in enumerate(value):
        with decode_path_context(index):
            out.append(decode(item))
    return tuple(out)


def expect_fixed_list(value: Any, decode: Callable[[Any], T], length: int) -> Tuple[T, ...]:
    if not isinstance(value, list) or len(value) != length:
        raise TypeMismatchError(f"array of {length} elements", value)
    return expect_list(value, decode)


def expect_int_list(value: Any, length: Optional[int] = None) -> Tuple[int, ...]:
    if length is None:
        return expect_list(value, expect_int)
    return expect_fixed_list(value, expect_int, length)


def expect_float_list(value: Any, length: Optional[int] = None) -> Tuple[float, ...]:
    if length is None:
        return expect_list(value, expect_number)
    return expect_fixed_list(value, expect_number, length)


def expect_string_list(value: Any) -> Tuple[str, ...]:
    return expect_list(value, expect_string)


def required_field(payload: Mapping[str, Any], key: str, decode: Callable[[Any], T]) -> T:
    if key not in payload:
        raise MissingFieldError(key)
    with decode_path_context(key):
        return decode(payload[key])


def optional_field(
    payload: Mapping[str, Any],
    key: str,
    decode: Callable[[Any], T],
    default: T,
) -> T:
    if key not in payload:
        return default
    with decode_path_context(key):
        return decode(payload[key])


def first_missing(seen: Sequence[str], expected: Sequence[str]) -> Optional[str]:
    for key in expected:
        if key not in seen:
            return key
    return None
