from enum import Enum
from typing import Optional

from ldtkjson.constants import ARRAY_PREFIX, EXTERN_ENUM_PREFIX, LOCAL_ENUM_PREFIX
from ldtkjson.errors import LdtkDecodeError, TypeMismatchError, UnknownFieldTypeError


class FieldKind(Enum):
    INT = "Int"
    FLOAT = "Float"
    BOOL = "Bool"
    STRING = "String"
    MULTILINES = "Multilines"
    FILE_PATH = "FilePath"
    LOCAL_ENUM = "LocalEnum"
    EXTERN_ENUM = "ExternEnum"
    COLOR = "Color"
    POINT = "Point"
    ENTITY_REF = "EntityRef"
    ARRAY = "Array"


class LayerType(Enum):
    INT_GRID = "IntGrid"
    ENTITIES = "Entities"
    TILES = "Tiles"
    AUTO_LAYER = "AutoLayer"


# Checked before the exact names; the tag suffix carries the enum or element name.
_PREFIX_KINDS = (
    (LOCAL_ENUM_PREFIX, FieldKind.LOCAL_ENUM),
    (EXTERN_ENUM_PREFIX, FieldKind.EXTERN_ENUM),
    (ARRAY_PREFIX, FieldKind.ARRAY),
)

_EXACT_KINDS = {
    kind.value: kind
    for kind in FieldKind
    if kind not in (FieldKind.LOCAL_ENUM, FieldKind.EXTERN_ENUM, FieldKind.ARRAY)
}


def normalize_field_type(tag: str) -> FieldKind:
    if not isinstance(tag, str):
        raise TypeMismatchError("field type string", tag)
    for prefix, kind in _PREFIX_KINDS:
        if tag.startswith(prefix):
            return kind
    try:
        return _EXACT_KINDS[tag]
    except KeyError:
        raise UnknownFieldTypeError(tag) from None


def enum_name(tag: str) -> Optional[str]:
    """Return ``Direction`` for ``LocalEnum.Direction``, or None if the tag has no name."""
    _, sep, name = tag.partition(".")
    if not sep or not name:
        return None
    return name


def array_element_tag(tag: str) -> Optional[str]:
    """Return ``Int`` for ``Array<Int>``, or None for a bare ``Array`` tag."""
    if not tag.startswith(ARRAY_PREFIX):
        return None
    rest = tag[len(ARRAY_PREFIX):]
    if rest.startswith("<") and rest.endswith(">") and len(rest) > 2:
        return rest[1:-1]
    return None


def parse_layer_type(value: str) -> LayerType:
    for layer_type in LayerType:
        if layer_type.value == value:
            return layer_type
    allowed = ", ".join(layer_type.value for layer_type in LayerType)
    raise LdtkDecodeError(f"Unsupported layer type '{value}'. Expected one of: {allowed}.")
