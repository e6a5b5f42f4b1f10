import json
import warnings
from typing import Any, Union

from ldtkjson.color import LdtkColor
from ldtkjson.constants import NEIGHBOUR_DIRECTIONS
from ldtkjson.errors import LdtkDecodeError, TypeMismatchError, format_decode_diagnostic
from ldtkjson.fields import decode_field_instance, decode_tileset_rect
from ldtkjson.model import (
    EntityInstance,
    ImagePosition,
    LayerInstance,
    Level,
    Neighbour,
    Project,
    TileInstance,
)
from ldtkjson.nullable import nullable_field
from ldtkjson.typesys import LayerType, parse_layer_type
from ldtkjson.values import (
    JsonObject,
    expect_bool,
    expect_float_list,
    expect_int,
    expect_int_list,
    expect_list,
    expect_number,
    expect_object,
    expect_string,
    expect_string_list,
    optional_field,
    required_field,
)


def parse_json(data: Union[bytes, str]) -> Any:
    """Parse JSON text, keeping the raw key/value pairs of every object."""
    try:
        return json.loads(data, object_pairs_hook=JsonObject)
    except json.JSONDecodeError as exc:
        raise LdtkDecodeError(
            f"Invalid JSON: {exc.msg}.", path=f"line {exc.lineno}, column {exc.colno}"
        ) from exc
    except UnicodeDecodeError as exc:
        raise LdtkDecodeError(f"Invalid JSON encoding: {exc.reason}.") from exc
    except RecursionError as exc:
        raise LdtkDecodeError("Invalid JSON: nesting is too deep.") from exc


def load_project(data: Union[bytes, str], *, strict_int_grid: bool = False) -> Project:
    """Parse and decode a whole project file.

    Args:
        data: Raw JSON bytes or text.
        strict_int_grid: Raise instead of warning when an IntGrid layer's
            ``intGridCsv`` does not hold ``__cWid * __cHei`` cells.

    Raises:
        LdtkDecodeError: On invalid JSON or any malformed part of the document.
    """
    return decode_project(parse_json(data), strict_int_grid=strict_int_grid)


def load_level(data: Union[bytes, str], *, strict_int_grid: bool = False) -> Level:
    """Parse and decode one level, e.g. a separately saved ``.ldtkl`` file."""
    return decode_level(parse_json(data), strict_int_grid=strict_int_grid)


def decode_project(value: Any, *, strict_int_grid: bool = False) -> Project:
    payload = expect_object(value)
    return Project(
        iid=optional_field(payload, "iid", expect_string, None),
        json_version=required_field(payload, "jsonVersion", expect_string),
        external_levels=optional_field(payload, "externalLevels", expect_bool, False),
        levels=required_field(
            payload,
            "levels",
            lambda levels: expect_list(
                levels, lambda level: decode_level(level, strict_int_grid=strict_int_grid)
            ),
        ),
    )


def decode_level(value: Any, *, strict_int_grid: bool = False) -> Level:
    payload = expect_object(value)
    return Level(
        bg_color=required_field(payload, "__bgColor", _decode_color_hex),
        bg_pos=nullable_field(payload, "__bgPos", decode_image_position),
        neighbours=required_field(
            payload, "__neighbours", lambda items: expect_list(items, decode_neighbour)
        ),
        bg_rel_path=nullable_field(payload, "bgRelPath", expect_string),
        external_rel_path=nullable_field(payload, "externalRelPath", expect_string),
        field_instances=required_field(
            payload, "fieldInstances", lambda items: expect_list(items, decode_field_instance)
        ),
        identifier=required_field(payload, "identifier", expect_string),
        iid=required_field(payload, "iid", expect_string),
        layer_instances=nullable_field(
            payload,
            "layerInstances",
            lambda items: expect_list(
                items, lambda layer: decode_layer_instance(layer, strict_int_grid=strict_int_grid)
            ),
        ),
        px_hei=required_field(payload, "pxHei", expect_int),
        px_wid=required_field(payload, "pxWid", expect_int),
        uid=required_field(payload, "uid", expect_int),
        world_depth=required_field(payload, "worldDepth", expect_int),
        world_x=required_field(payload, "worldX", expect_int),
        world_y=required_field(payload, "worldY", expect_int),
    )


def decode_image_position(value: Any) -> ImagePosition:
    payload = expect_object(value)
    return ImagePosition(
        crop_rect=required_field(payload, "cropRect", lambda v: expect_float_list(v, 4)),
        scale=required_field(payload, "scale", lambda v: expect_float_list(v, 2)),
        top_left_px=required_field(payload, "topLeftPx", lambda v: expect_int_list(v, 2)),
    )


def decode_neighbour(value: Any) -> Neighbour:
    payload = expect_object(value)
    direction = required_field(payload, "dir", expect_string)
    if direction not in NEIGHBOUR_DIRECTIONS:
        warnings.warn(
            format_decode_diagnostic(f"Unknown neighbour direction '{direction}'."),
            stacklevel=2,
        )
    return Neighbour(
        dir=direction,
        level_iid=required_field(payload, "levelIid", expect_string),
    )


def decode_layer_instance(value: Any, *, strict_int_grid: bool = False) -> LayerInstance:
    payload = expect_object(value)
    layer = LayerInstance(
        c_hei=required_field(payload, "__cHei", expect_int),
        c_wid=required_field(payload, "__cWid", expect_int),
        grid_size=required_field(payload, "__gridSize", expect_int),
        identifier=required_field(payload, "__identifier", expect_string),
        opacity=required_field(payload, "__opacity", expect_number),
        px_total_offset_x=required_field(payload, "__pxTotalOffsetX", expect_int),
        px_total_offset_y=required_field(payload, "__pxTotalOffsetY", expect_int),
        tileset_def_uid=nullable_field(payload, "__tilesetDefUid", expect_int),
        tileset_rel_path=nullable_field(payload, "__tilesetRelPath", expect_string),
        layer_type=required_field(
            payload, "__type", lambda v: parse_layer_type(expect_string(v))
        ),
        auto_layer_tiles=required_field(
            payload, "autoLayerTiles", lambda items: expect_list(items, decode_tile_instance)
        ),
        entity_instances=required_field(
            payload, "entityInstances", lambda items: expect_list(items, decode_entity_instance)
        ),
        grid_tiles=required_field(
            payload, "gridTiles", lambda items: expect_list(items, decode_tile_instance)
        ),
        iid=required_field(payload, "iid", expect_string),
        int_grid_csv=required_field(payload, "intGridCsv", expect_int_list),
        layer_def_uid=required_field(payload, "layerDefUid", expect_int),
        level_id=required_field(payload, "levelId", expect_int),
        override_tileset_uid=nullable_field(payload, "overrideTilesetUid", expect_int),
        px_offset_x=required_field(payload, "pxOffsetX", expect_int),
        px_offset_y=required_field(payload, "pxOffsetY", expect_int),
        visible=required_field(payload, "visible", expect_bool),
    )
    _check_int_grid_size(layer, strict=strict_int_grid)
    return layer


def _check_int_grid_size(layer: LayerInstance, *, strict: bool) -> None:
    if layer.layer_type != LayerType.INT_GRID:
        return
    expected = layer.c_wid * layer.c_hei
    if len(layer.int_grid_csv) == expected:
        return
    message = (
        f"IntGrid layer '{layer.identifier}' has {len(layer.int_grid_csv)} cells, "
        f"expected {layer.c_wid}x{layer.c_hei} = {expected}."
    )
    if strict:
        raise LdtkDecodeError(message)
    warnings.warn(format_decode_diagnostic(message), stacklevel=3)


def decode_tile_instance(value: Any) -> TileInstance:
    payload = expect_object(value)
    return TileInstance(
        alpha=required_field(payload, "a", expect_number),
        flip=required_field(payload, "f", expect_int),
        px=required_field(payload, "px", lambda v: expect_int_list(v, 2)),
        src=required_field(payload, "src", lambda v: expect_int_list(v, 2)),
        tile_id=required_field(payload, "t", expect_int),
    )


def decode_entity_instance(value: Any) -> EntityInstance:
    payload = expect_object(value)
    return EntityInstance(
        grid=required_field(payload, "__grid", lambda v: expect_int_list(v, 2)),
        identifier=required_field(payload, "__identifier", expect_string),
        pivot=required_field(payload, "__pivot", lambda v: expect_float_list(v, 2)),
        smart_color=required_field(payload, "__smartColor", expect_string),
        tags=required_field(payload, "__tags", expect_string_list),
        tile=nullable_field(payload, "__tile", decode_tileset_rect),
        world_x=required_field(payload, "__worldX", expect_int),
        world_y=required_field(payload, "__worldY", expect_int),
        def_uid=required_field(payload, "defUid", expect_int),
        field_instances=required_field(
            payload, "fieldInstances", lambda items: expect_list(items, decode_field_instance)
        ),
        iid=required_field(payload, "iid", expect_string),
        local_pos=required_field(payload, "px", lambda v: expect_int_list(v, 2)),
        width=required_field(payload, "width", expect_int),
        height=required_field(payload, "height", expect_int),
    )


def _decode_color_hex(value: Any) -> LdtkColor:
    if not isinstance(value, str):
        raise TypeMismatchError("color string", value)
    return LdtkColor.from_hex(value)


__all__ = [
    "parse_json",
    "load_project",
    "load_level",
    "decode_project",
    "decode_level",
    "decode_image_position",
    "decode_neighbour",
    "decode_layer_instance",
    "decode_tile_instance",
    "decode_entity_instance",
]
