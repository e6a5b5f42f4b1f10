import json
from typing import Any, Dict, Optional

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
from ldtkjson.model import (
    EntityInstance,
    FieldInstance,
    ImagePosition,
    LayerInstance,
    Level,
    Neighbour,
    Project,
    TileInstance,
    TilesetRect,
)
from ldtkjson.nullable import encode_nullable
from ldtkjson.typesys import FieldKind


def project_to_dict(project: Project) -> Dict[str, Any]:
    """Serialize a :class:`Project` back into its JSON payload."""
    payload: Dict[str, Any] = {
        "jsonVersion": project.json_version,
        "externalLevels": project.external_levels,
        "levels": [level_to_dict(level) for level in project.levels],
    }
    if project.iid is not None:
        payload["iid"] = project.iid
    return payload


def level_to_dict(level: Level) -> Dict[str, Any]:
    return {
        "__bgColor": level.bg_color.to_hex(),
        "__bgPos": encode_nullable(level.bg_pos, _image_position_to_dict),
        "__neighbours": [_neighbour_to_dict(neighbour) for neighbour in level.neighbours],
        "bgRelPath": level.bg_rel_path,
        "externalRelPath": level.external_rel_path,
        "fieldInstances": [field_instance_to_dict(field) for field in level.field_instances],
        "identifier": level.identifier,
        "iid": level.iid,
        "layerInstances": encode_nullable(
            level.layer_instances,
            lambda layers: [layer_instance_to_dict(layer) for layer in layers],
        ),
        "pxHei": level.px_hei,
        "pxWid": level.px_wid,
        "uid": level.uid,
        "worldDepth": level.world_depth,
        "worldX": level.world_x,
        "worldY": level.world_y,
    }


def layer_instance_to_dict(layer: LayerInstance) -> Dict[str, Any]:
    return {
        "__cHei": layer.c_hei,
        "__cWid": layer.c_wid,
        "__gridSize": layer.grid_size,
        "__identifier": layer.identifier,
        "__opacity": layer.opacity,
        "__pxTotalOffsetX": layer.px_total_offset_x,
        "__pxTotalOffsetY": layer.px_total_offset_y,
        "__tilesetDefUid": layer.tileset_def_uid,
        "__tilesetRelPath": layer.tileset_rel_path,
        "__type": layer.layer_type.value,
        "autoLayerTiles": [_tile_to_dict(tile) for tile in layer.auto_layer_tiles],
        "entityInstances": [entity_instance_to_dict(entity) for entity in layer.entity_instances],
        "gridTiles": [_tile_to_dict(tile) for tile in layer.grid_tiles],
        "iid": layer.iid,
        "intGridCsv": list(layer.int_grid_csv),
        "layerDefUid": layer.layer_def_uid,
        "levelId": layer.level_id,
        "overrideTilesetUid": layer.override_tileset_uid,
        "pxOffsetX": layer.px_offset_x,
        "pxOffsetY": layer.px_offset_y,
        "visible": layer.visible,
    }


def entity_instance_to_dict(entity: EntityInstance) -> Dict[str, Any]:
    return {
        "__grid": list(entity.grid),
        "__identifier": entity.identifier,
        "__pivot": list(entity.pivot),
        "__smartColor": entity.smart_color,
        "__tags": list(entity.tags),
        "__tile": encode_nullable(entity.tile, _tileset_rect_to_dict),
        "__worldX": entity.world_x,
        "__worldY": entity.world_y,
        "defUid": entity.def_uid,
        "fieldInstances": [field_instance_to_dict(field) for field in entity.field_instances],
        "iid": entity.iid,
        "px": list(entity.local_pos),
        "width": entity.width,
        "height": entity.height,
    }


def field_instance_to_dict(field: FieldInstance) -> Dict[str, Any]:
    """Serialize a field instance.

    ``__type`` is the tag read at decode time. Field instances built by hand
    without one get a tag rebuilt from the value: enum names come from the
    value, array element types from the first element.
    """
    type_tag = field.field_type if field.field_type is not None else field_type_tag(field.value)
    return {
        "defUid": field.def_uid,
        "__identifier": field.identifier,
        "__tile": encode_nullable(field.tile, _tileset_rect_to_dict),
        "__type": type_tag,
        "__value": encode_nullable(field.value, field_value_to_json),
    }


def field_type_tag(value: Optional[FieldValue]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (LocalEnumValue, ExternEnumValue)):
        return f"{value.kind.value}.{value.name}"
    if isinstance(value, ArrayValue):
        if not value.items:
            return FieldKind.ARRAY.value
        return f"{FieldKind.ARRAY.value}<{field_type_tag(value.items[0])}>"
    return value.kind.value


def field_value_to_json(value: FieldValue) -> Any:
    """Encode a value as the plain JSON shape of its variant, without a tag."""
    if isinstance(value, (IntValue, FloatValue, BoolValue)):
        return value.value
    if isinstance(value, (StringValue, MultilinesValue, FilePathValue)):
        return value.value
    if isinstance(value, (LocalEnumValue, ExternEnumValue)):
        return {"name": value.name, "variant": value.variant}
    if isinstance(value, ColorValue):
        return value.color.to_hex()
    if isinstance(value, PointValue):
        return {"cx": value.cx, "cy": value.cy}
    if isinstance(value, EntityRefValue):
        return {
            "entityIid": value.entity_iid,
            "layerIid": value.layer_iid,
            "levelIid": value.level_iid,
            "worldIid": value.world_iid,
        }
    if isinstance(value, ArrayValue):
        return [field_value_to_json(item) for item in value.items]
    raise TypeError(f"Unsupported field value: {value!r}")


def dump_project(project: Project, *, indent: Optional[int] = 2) -> str:
    return json.dumps(project_to_dict(project), indent=indent)


def dump_level(level: Level, *, indent: Optional[int] = 2) -> str:
    return json.dumps(level_to_dict(level), indent=indent)


def _tile_to_dict(tile: TileInstance) -> Dict[str, Any]:
    return {
        "a": tile.alpha,
        "f": tile.flip,
        "px": list(tile.px),
        "src": list(tile.src),
        "t": tile.tile_id,
    }


def _tileset_rect_to_dict(rect: TilesetRect) -> Dict[str, Any]:
    return {
        "tilesetUid": rect.tileset_uid,
        "x": rect.x,
        "y": rect.y,
        "w": rect.w,
        "h": rect.h,
    }


def _image_position_to_dict(position: ImagePosition) -> Dict[str, Any]:
    return {
        "cropRect": list(position.crop_rect),
        "scale": list(position.scale),
        "topLeftPx": list(position.top_left_px),
    }


def _neighbour_to_dict(neighbour: Neighbour) -> Dict[str, Any]:
    return {
        "dir": neighbour.dir,
        "levelIid": neighbour.level_iid,
    }
