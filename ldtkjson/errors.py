import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Union


PathSegment = Union[str, int]

_CURRENT_DECODE_PATH: contextvars.ContextVar[Tuple[PathSegment, ...]] = contextvars.ContextVar(
    "ldtkjson_current_decode_path", default=()
)


def format_path(path: Tuple[PathSegment, ...]) -> str:
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        elif out:
            out += f".{segment}"
        else:
            out = segment
    return out


def current_path() -> str:
    return format_path(_CURRENT_DECODE_PATH.get())


def _format_with_context(message: str, *, path: Optional[str] = None) -> str:
    path = path if path is not None else current_path()
    if not path:
        return message
    return f"{message}\nLocation: {path}"


def format_decode_diagnostic(message: str) -> str:
    """Attach the active key path to a warning/info diagnostic string."""
    return _format_with_context(message)


@contextmanager
def decode_path_context(segment: PathSegment) -> Iterator[None]:
    token = _CURRENT_DECODE_PATH.set(_CURRENT_DECODE_PATH.get() + (segment,))
    try:
        yield
    finally:
        _CURRENT_DECODE_PATH.reset(token)


class LdtkError(Exception):
    """Base ldtkjson error."""


class LdtkDecodeError(LdtkError):
    """Raised when a document does not match the expected shape."""

    def __init__(self, message: str, *, path: Optional[str] = None):
        self.path = path if path is not None else current_path()
        super().__init__(_format_with_context(message, path=self.path))

    def __reduce__(self):
        # Subclass constructors take their payload, not the formatted message.
        return _rebuild_decode_error, (type(self), self.args, self.__dict__)


def _rebuild_decode_error(cls, args, state):
    error = cls.__new__(cls, *args)
    error.args = args
    error.__dict__.update(state)
    return error


class DuplicateFieldError(LdtkDecodeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate field '{name}'.")


class MissingFieldError(LdtkDecodeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing field '{name}'.")


class UnknownFieldTypeError(LdtkDecodeError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Expected a field type, got '{token}'.")


class MalformedColorError(LdtkDecodeError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Malformed color {text!r}. Expected '#rrggbb'.")


class TypeMismatchError(LdtkDecodeError):
    """Raised when a value's JSON shape differs from what its kind requires."""

    def __init__(self, expected: str, actual: object):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected}, got {actual!r}.")
