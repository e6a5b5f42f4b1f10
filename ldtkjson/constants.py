from typing import Tuple

# Field instance wire keys, in the order missing keys are reported.
FIELD_DEF_UID = "defUid"
FIELD_IDENTIFIER = "__identifier"
FIELD_TILE = "__tile"
FIELD_TYPE = "__type"
FIELD_VALUE = "__value"

FIELD_INSTANCE_KEYS: Tuple[str, ...] = (
    FIELD_DEF_UID,
    FIELD_IDENTIFIER,
    FIELD_TILE,
    FIELD_TYPE,
    FIELD_VALUE,
)

# Editor-only history written by older LDtk versions.
LEGACY_FIELD_KEYS = frozenset({"realEditorValues"})

LOCAL_ENUM_PREFIX = "LocalEnum"
EXTERN_ENUM_PREFIX = "ExternEnum"
ARRAY_PREFIX = "Array"

COLOR_HEX_LENGTH = 7
OPAQUE_ALPHA = 255

NEIGHBOUR_DIRECTIONS = frozenset({"n", "s", "w", "e", "<", ">", "o"})

__all__ = [
    "FIELD_DEF_UID",
    "FIELD_IDENTIFIER",
    "FIELD_TILE",
    "FIELD_TYPE",
    "FIELD_VALUE",
    "FIELD_INSTANCE_KEYS",
    "LEGACY_FIELD_KEYS",
    "LOCAL_ENUM_PREFIX",
    "EXTERN_ENUM_PREFIX",
    "ARRAY_PREFIX",
    "COLOR_HEX_LENGTH",
    "OPAQUE_ALPHA",
    "NEIGHBOUR_DIRECTIONS",
]
