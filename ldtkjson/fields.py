"""Field instance decoding.

A field instance stores its value under ``__value`` and the value's type under
the sibling key ``__type``. The producer does not guarantee key order, so the
value is kept raw while the object is walked and only reinterpreted once the
type tag has been normalized::

    {"__value": "#ff0000", "__type": "Color", ...}  ->  ColorValue(LdtkColor(255, 0, 0))
"""

import logging
from typing import Any, Callable, Dict, Optional, Type, Union

from ldtkjson.color import LdtkColor
from ldtkjson.constants import (
    FIELD_DEF_UID,
    FIELD_IDENTIFIER,
    FIELD_INSTANCE_KEYS,
    FIELD_TILE,
    FIELD_TYPE,
    FIELD_VALUE,
    LEGACY_FIELD_KEYS,
)
from ldtkjson.errors import (
    DuplicateFieldError,
    LdtkDecodeError,
    MissingFieldError,
    TypeMismatchError,
    decode_path_context,
)
from ldtkjson.field_values import (
    ArrayValue,
    BoolValue,
    ColorValue,
    EntityRefValue,
    ExternEnumValue,
    FieldValue,
    FilePathValue,
    FloatValue,
    IntValue,
    LocalEnumValue,
    MultilinesValue,
    PointValue,
    StringValue,
)
from ldtkjson.model import FieldInstance, TilesetRect
from ldtkjson.nullable import decode_nullable, nullable_field
from ldtkjson.typesys import FieldKind, array_element_tag, enum_name, normalize_field_type
from ldtkjson.values import (
    expect_bool,
    expect_int,
    expect_list,
    expect_number,
    expect_object,
    expect_string,
    first_missing,
    iter_pairs,
    required_field,
)

logger = logging.getLogger(__name__)

ValueDecoder = Callable[[Any, Optional[str]], FieldValue]


def decode_tileset_rect(value: Any) -> TilesetRect:
    payload = expect_object(value)
    return TilesetRect(
        tileset_uid=required_field(payload, "tilesetUid", expect_int),
        x=required_field(payload, "x", expect_int),
        y=required_field(payload, "y", expect_int),
        w=required_field(payload, "w", expect_int),
        h=required_field(payload, "h", expect_int),
    )


def _classify_field_key(key: str) -> Optional[str]:
    if key in FIELD_INSTANCE_KEYS:
        return key
    if key in LEGACY_FIELD_KEYS:
        return None
    logger.debug("Ignoring unknown field instance key %r", key)
    return None


def decode_field_instance(payload: Any) -> FieldInstance:
    """Decode one field instance object.

    ``payload`` is a mapping or a tuple of ``(key, value)`` pairs; a JSON array is
    rejected. Objects produced by :func:`ldtkjson.decoder.parse_json` keep their
    raw pairs, so a key written twice is reported as :class:`DuplicateFieldError`.

    Raises:
        DuplicateFieldError: A recognized key appears more than once.
        MissingFieldError: A recognized key never appears.
        UnknownFieldTypeError: ``__type`` names no known kind.
        TypeMismatchError: ``__value`` does not have the shape its kind needs.
        MalformedColorError: A ``Color`` value is not ``#rrggbb``.
    """
    raw: Dict[str, Any] = {}
    for key, value in iter_pairs(payload):
        slot = _classify_field_key(key)
        if slot is None:
            continue
        if slot in raw:
            raise DuplicateFieldError(slot)
        raw[slot] = value

    missing = first_missing(list(raw), FIELD_INSTANCE_KEYS)
    if missing is not None:
        raise MissingFieldError(missing)

    def_uid = required_field(raw, FIELD_DEF_UID, expect_int)
    identifier = required_field(raw, FIELD_IDENTIFIER, expect_string)
    tile = nullable_field(raw, FIELD_TILE, decode_tileset_rect)

    tag = raw[FIELD_TYPE]
    with decode_path_context(FIELD_TYPE):
        kind = normalize_field_type(tag)
    with decode_path_context(FIELD_VALUE):
        value = decode_field_value(kind, raw[FIELD_VALUE], tag=tag)

    return FieldInstance(
        def_uid=def_uid,
        identifier=identifier,
        tile=tile,
        value=value,
        field_type=tag,
    )


def decode_field_value(
    kind: FieldKind,
    value: Any,
    *,
    tag: Optional[str] = None,
) -> Optional[FieldValue]:
    """Reinterpret a raw JSON value as the ``FieldValue`` variant for ``kind``.

    ``null`` decodes to None for every kind. ``tag`` is the unnormalized type
    tag; enum names and array element types are read from it.
    """
    return decode_nullable(value, lambda present: _VALUE_DECODERS[kind](present, tag))


def _decode_int(value: Any, tag: Optional[str]) -> FieldValue:
    return IntValue(expect_int(value))


def _decode_float(value: Any, tag: Optional[str]) -> FieldValue:
    return FloatValue(expect_number(value))


def _decode_bool(value: Any, tag: Optional[str]) -> FieldValue:
    return BoolValue(expect_bool(value))


def _decode_string(value: Any, tag: Optional[str]) -> FieldValue:
    return StringValue(expect_string(value))


def _rewrap_text(
    variant: Union[Type[MultilinesValue], Type[FilePathValue]],
    label: str,
) -> ValueDecoder:
    def _decode(value: Any, tag: Optional[str]) -> FieldValue:
        if not isinstance(value, str):
            raise TypeMismatchError(label, value)
        return variant(value)

    return _decode


def _decode_enum(
    value_type: Union[Type[LocalEnumValue], Type[ExternEnumValue]],
) -> ValueDecoder:
    def _decode(value: Any, tag: Optional[str]) -> FieldValue:
        if isinstance(value, str):
            name = enum_name(tag) if tag is not None else None
            if name is None:
                raise TypeMismatchError("enum object with 'name' and 'variant'", value)
            return value_type(name=name, variant=value)
        payload = expect_object(value)
        return value_type(
            name=required_field(payload, "name", expect_string),
            variant=required_field(payload, "variant", expect_string),
        )

    return _decode


def _decode_color(value: Any, tag: Optional[str]) -> FieldValue:
    if not isinstance(value, str):
        raise TypeMismatchError("color string", value)
    return ColorValue(LdtkColor.from_hex(value))


def _decode_point(value: Any, tag: Optional[str]) -> FieldValue:
    payload = expect_object(value)
    return PointValue(
        cx=required_field(payload, "cx", expect_int),
        cy=required_field(payload, "cy", expect_int),
    )


def _decode_entity_ref(value: Any, tag: Optional[str]) -> FieldValue:
    payload = expect_object(value)
    return EntityRefValue(
        entity_iid=required_field(payload, "entityIid", expect_string),
        layer_iid=required_field(payload, "layerIid", expect_string),
        level_iid=required_field(payload, "levelIid", expect_string),
        world_iid=required_field(payload, "worldIid", expect_string),
    )


def _decode_array(value: Any, tag: Optional[str]) -> FieldValue:
    if not isinstance(value, list):
        raise TypeMismatchError("array", value)
    element_tag = array_element_tag(tag) if tag is not None else None
    if element_tag is None:
        if value:
            raise LdtkDecodeError(
                f"Array field type '{tag}' does not name an element type; "
                "expected 'Array<...>'."
            )
        return ArrayValue(())
    element_kind = normalize_field_type(element_tag)

    def _decode_item(item: Any) -> FieldValue:
        if item is None:
            raise TypeMismatchError(f"{element_tag} value", item)
        return _VALUE_DECODERS[element_kind](item, element_tag)

    return ArrayValue(expect_list(value, _decode_item))


_VALUE_DECODERS: Dict[FieldKind, ValueDecoder] = {
    FieldKind.INT: _decode_int,
    FieldKind.FLOAT: _decode_float,
    FieldKind.BOOL: _decode_bool,
    FieldKind.STRING: _decode_string,
    FieldKind.MULTILINES: _rewrap_text(MultilinesValue, "multiline string"),
    FieldKind.FILE_PATH: _rewrap_text(FilePathValue, "file path"),
    FieldKind.LOCAL_ENUM: _decode_enum(LocalEnumValue),
    FieldKind.EXTERN_ENUM: _decode_enum(ExternEnumValue),
    FieldKind.COLOR: _decode_color,
    FieldKind.POINT: _decode_point,
    FieldKind.ENTITY_REF: _decode_entity_ref,
    FieldKind.ARRAY: _decode_array,
}
