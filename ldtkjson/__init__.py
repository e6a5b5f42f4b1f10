"""Public Python API for ldtkjson.

The package decodes LDtk level-design documents into an immutable model.
Field instance values are typed from their sibling ``__type`` tag; see
``ldtkjson.fields`` for the decoding rules and ``ldtkjson.field_values`` for
the value variants.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from ldtkjson.color import LdtkColor
from ldtkjson.decoder import decode_level, decode_project, load_level, load_project
from ldtkjson.errors import (
    DuplicateFieldError,
    LdtkDecodeError,
    LdtkError,
    MalformedColorError,
    MissingFieldError,
    TypeMismatchError,
    UnknownFieldTypeError,
)
from ldtkjson.exporter import dump_level, dump_project, level_to_dict, project_to_dict
from ldtkjson.fields import decode_field_instance, decode_field_value
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
from ldtkjson.typesys import FieldKind, LayerType, normalize_field_type

try:
    __version__: str = version("ldtkjson")
except PackageNotFoundError:  # pragma: no cover - editable local fallback
    __version__ = "0.1.0"


__all__ = [
    "__version__",
    "DuplicateFieldError",
    "EntityInstance",
    "FieldInstance",
    "FieldKind",
    "ImagePosition",
    "LayerInstance",
    "LayerType",
    "LdtkColor",
    "LdtkDecodeError",
    "LdtkError",
    "Level",
    "MalformedColorError",
    "MissingFieldError",
    "Neighbour",
    "Project",
    "TileInstance",
    "TilesetRect",
    "TypeMismatchError",
    "UnknownFieldTypeError",
    "decode_field_instance",
    "decode_field_value",
    "decode_level",
    "decode_project",
    "dump_level",
    "dump_project",
    "level_to_dict",
    "load_level",
    "load_project",
    "normalize_field_type",
    "project_to_dict",
]
