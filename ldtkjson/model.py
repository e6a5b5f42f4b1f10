from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ldtkjson.color import LdtkColor
from ldtkjson.field_values import FieldValue
from ldtkjson.typesys import LayerType


@dataclass(frozen=True)
class TilesetRect:
    tileset_uid: int
    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class FieldInstance:
    def_uid: int
    identifier: str
    tile: Optional[TilesetRect]
    # Variant always matches the kind resolved from ``__type`` at decode time.
    value: Optional[FieldValue]
    # ``__type`` as written, e.g. "LocalEnum.Direction" or "Array<Int>".
    field_type: Optional[str] = None


@dataclass(frozen=True)
class TileInstance:
    alpha: float
    flip: int
    px: Tuple[int, ...]
    src: Tuple[int, ...]
    tile_id: int

    @property
    def flip_x(self) -> bool:
        return bool(self.flip & 1)

    @property
    def flip_y(self) -> bool:
        return bool(self.flip & 2)


@dataclass(frozen=True)
class EntityInstance:
    grid: Tuple[int, ...]
    identifier: str
    pivot: Tuple[float, ...]
    smart_color: str
    tags: Tuple[str, ...]
    tile: Optional[TilesetRect]
    world_x: int
    world_y: int
    def_uid: int
    field_instances: Tuple[FieldInstance, ...]
    iid: str
    local_pos: Tuple[int, ...]
    width: int
    height: int

    def fields_by_identifier(self) -> Dict[str, FieldInstance]:
        return {field.identifier: field for field in self.field_instances}


@dataclass(frozen=True)
class LayerInstance:
    c_hei: int
    c_wid: int
    grid_size: int
    identifier: str
    opacity: float
    px_total_offset_x: int
    px_total_offset_y: int
    tileset_def_uid: Optional[int]
    tileset_rel_path: Optional[str]
    layer_type: LayerType
    # Display order: the first tile is drawn beneath the second, and so on.
    auto_layer_tiles: Tuple[TileInstance, ...]
    entity_instances: Tuple[EntityInstance, ...]
    grid_tiles: Tuple[TileInstance, ...]
    iid: str
    # Row-major, c_wid * c_hei cells. 0 is an empty cell.
    int_grid_csv: Tuple[int, ...]
    layer_def_uid: int
    level_id: int
    override_tileset_uid: Optional[int]
    px_offset_x: int
    px_offset_y: int
    visible: bool

    def int_grid_value(self, cx: int, cy: int) -> int:
        if not (0 <= cx < self.c_wid and 0 <= cy < self.c_hei):
            raise IndexError(f"Cell ({cx}, {cy}) is outside the {self.c_wid}x{self.c_hei} grid.")
        return self.int_grid_csv[cy * self.c_wid + cx]

    def int_grid_rows(self) -> List[List[int]]:
        if self.c_wid <= 0:
            return []
        return [
            list(self.int_grid_csv[row * self.c_wid:(row + 1) * self.c_wid])
            for row in range(len(self.int_grid_csv) // self.c_wid)
        ]


@dataclass(frozen=True)
class ImagePosition:
    # [crop_x, crop_y, crop_width, crop_height]
    crop_rect: Tuple[float, ...]
    scale: Tuple[float, ...]
    top_left_px: Tuple[int, ...]


@dataclass(frozen=True)
class Neighbour:
    # n, s, w, e; or <, >, o for deeper, shallower and overlapping levels.
    dir: str
    level_iid: str


@dataclass(frozen=True)
class Level:
    bg_color: LdtkColor
    bg_pos: Optional[ImagePosition]
    neighbours: Tuple[Neighbour, ...]
    bg_rel_path: Optional[str]
    external_rel_path: Optional[str]
    field_instances: Tuple[FieldInstance, ...]
    identifier: str
    iid: str
    # None when the project saves levels in separate files.
    layer_instances: Optional[Tuple[LayerInstance, ...]]
    px_hei: int
    px_wid: int
    uid: int
    world_depth: int
    world_x: int
    world_y: int

    def layer(self, identifier: str) -> Optional[LayerInstance]:
        for layer in self.layer_instances or ():
            if layer.identifier == identifier:
                return layer
        return None


@dataclass(frozen=True)
class Project:
    iid: Optional[str]
    json_version: str
    external_levels: bool
    levels: Tuple[Level, ...]

    def level(self, identifier: str) -> Optional[Level]:
        for level in self.levels:
            if level.identifier == identifier:
                return level
        return None
