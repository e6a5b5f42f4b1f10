import json

from ldtkjson.color import LdtkColor
from ldtkjson.decoder import decode_level, load_level, load_project
from ldtkjson.exporter import (
    dump_level,
    dump_project,
    entity_instance_to_dict,
    field_instance_to_dict,
    layer_instance_to_dict,
    level_to_dict,
    project_to_dict,
)
from ldtkjson.field_values import ArrayValue, ColorValue, LocalEnumValue, MultilinesValue
from ldtkjson.fields import decode_field_instance
from ldtkjson.model import FieldInstance, Project

from tests.payloads import level_payload


def test_level_to_dict_round_trips_through_decoder():
    level = decode_level(level_payload())
    assert decode_level(level_to_dict(level)) == level


def test_dump_level_round_trips_through_json_text():
    level = decode_level(
        level_payload(
            __bgPos={"cropRect": [0, 0, 8, 8], "scale": [2, 2], "topLeftPx": [1, 1]},
        )
    )
    assert load_level(dump_level(level)) == level


def test_dump_project_round_trips():
    project = Project(
        iid="p",
        json_version="1.5.3",
        external_levels=True,
        levels=(decode_level(level_payload(layerInstances=None)),),
    )
    assert load_project(dump_project(project)) == project
    assert json.loads(dump_project(project, indent=None))["externalLevels"] is True


def test_project_to_dict_omits_missing_iid():
    project = Project(iid=None, json_version="1.0.0", external_levels=False, levels=())
    assert project_to_dict(project) == {
        "jsonVersion": "1.0.0",
        "externalLevels": False,
        "levels": [],
    }


def test_level_keys_use_wire_names():
    payload = level_to_dict(decode_level(level_payload()))
    assert payload["__bgColor"] == "#40465b"
    assert payload["__neighbours"] == [{"dir": "e", "levelIid": "level-2"}]
    layer = payload["layerInstances"][1]
    assert layer["__type"] == "IntGrid"
    assert layer["intGridCsv"] == [0, 1, 2, 0]


def test_layer_and_entity_to_dict_keep_renamed_keys():
    level = decode_level(level_payload())
    entity = level.layer("Entities").entity_instances[0]
    entity_dict = entity_instance_to_dict(entity)
    assert entity_dict["px"] == [16, 48]
    assert entity_dict["__tile"] == {"tilesetUid": 2, "x": 0, "y": 0, "w": 16, "h": 16}
    assert entity_dict["__pivot"] == [0.5, 1.0]
    assert entity_dict["__worldY"] == 48
    assert entity_dict["fieldInstances"][1] == {
        "defUid": 100,
        "__identifier": "spawn",
        "__tile": None,
        "__type": "Point",
        "__value": {"cx": 1, "cy": 2},
    }

    layer_dict = layer_instance_to_dict(level.layer("Collisions"))
    assert "seed" not in layer_dict
    assert layer_dict["__tilesetDefUid"] is None


def test_field_instance_keeps_decoded_type_tag():
    field = decode_field_instance(
        {
            "defUid": 1,
            "__identifier": "note",
            "__tile": None,
            "__type": "Multilines",
            "__value": None,
        }
    )
    payload = field_instance_to_dict(field)
    assert payload["__type"] == "Multilines"
    assert payload["__value"] is None
    assert decode_field_instance(payload) == field


def test_field_instance_without_tag_rebuilds_it_from_value():
    field = FieldInstance(
        def_uid=1,
        identifier="dirs",
        tile=None,
        value=ArrayValue([LocalEnumValue(name="Dir", variant="Up")]),
    )
    payload = field_instance_to_dict(field)
    assert payload["__type"] == "Array<LocalEnum.Dir>"
    assert payload["__value"] == [{"name": "Dir", "variant": "Up"}]
    decoded = decode_field_instance(payload)
    assert decoded.value == field.value
    assert decoded.field_type == "Array<LocalEnum.Dir>"


def test_hand_built_string_subtype_keeps_its_tag():
    field = FieldInstance(def_uid=1, identifier="text", tile=None, value=MultilinesValue("a\nb"))
    assert decode_field_instance(field_instance_to_dict(field)).value == MultilinesValue("a\nb")


def test_color_field_encodes_hex():
    field = FieldInstance(
        def_uid=1,
        identifier="tint",
        tile=None,
        value=ColorValue(LdtkColor(0, 128, 255)),
    )
    assert field_instance_to_dict(field)["__value"] == "#0080ff"
