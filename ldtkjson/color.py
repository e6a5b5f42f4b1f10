from dataclasses import dataclass

from ldtkjson.constants import COLOR_HEX_LENGTH, OPAQUE_ALPHA
from ldtkjson.errors import MalformedColorError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class LdtkColor:
    r: int
    g: int
    b: int
    a: int = OPAQUE_ALPHA

    @classmethod
    def from_hex(cls, text: str) -> "LdtkColor":
        """Parse a ``#rrggbb`` string. Alpha is always opaque."""
        if (
            not isinstance(text, str)
            or len(text) != COLOR_HEX_LENGTH
            or text[0] != "#"
            or any(ch not in _HEX_DIGITS for ch in text[1:])
        ):
            raise MalformedColorError(text)
        return cls(
            r=int(text[1:3], 16),
            g=int(text[3:5], 16),
            b=int(text[5:7], 16),
        )

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_rgba_floats(self) -> tuple:
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)
