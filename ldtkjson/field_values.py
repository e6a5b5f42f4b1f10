from dataclasses import dataclass
from typing import Tuple

from ldtkjson.color import LdtkColor
from ldtkjson.typesys import FieldKind


class FieldValue:
    kind: FieldKind


@dataclass(frozen=True)
class IntValue(FieldValue):
    value: int
    kind = FieldKind.INT


@dataclass(frozen=True)
class FloatValue(FieldValue):
    value: float
    kind = FieldKind.FLOAT


@dataclass(frozen=True)
class BoolValue(FieldValue):
    value: bool
    kind = FieldKind.BOOL


# The three string variants share a payload; consumers branch on the variant.

@dataclass(frozen=True)
class StringValue(FieldValue):
    value: str
    kind = FieldKind.STRING


@dataclass(frozen=True)
class MultilinesValue(FieldValue):
    value: str
    kind = FieldKind.MULTILINES


@dataclass(frozen=True)
class FilePathValue(FieldValue):
    value: str
    kind = FieldKind.FILE_PATH


@dataclass(frozen=True)
class LocalEnumValue(FieldValue):
    name: str
    variant: str
    kind = FieldKind.LOCAL_ENUM


@dataclass(frozen=True)
class ExternEnumValue(FieldValue):
    name: str
    variant: str
    kind = FieldKind.EXTERN_ENUM


@dataclass(frozen=True)
class ColorValue(FieldValue):
    color: LdtkColor
    kind = FieldKind.COLOR


@dataclass(frozen=True)
class PointValue(FieldValue):
    cx: int
    cy: int
    kind = FieldKind.POINT


@dataclass(frozen=True)
class EntityRefValue(FieldValue):
    entity_iid: str
    layer_iid: str
    level_iid: str
    world_iid: str
    kind = FieldKind.ENTITY_REF


@dataclass(frozen=True)
class ArrayValue(FieldValue):
    items: Tuple[FieldValue, ...]
    kind = FieldKind.ARRAY

    def __post_init__(self) -> None:
        # Callers may pass a list; always stored as a tuple.
        object.__setattr__(self, "items", tuple(self.items))

