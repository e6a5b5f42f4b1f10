import pytest

from ldtkjson.color import LdtkColor
from ldtkjson.errors import LdtkDecodeError, MalformedColorError


def test_from_hex_parses_channels_with_opaque_alpha():
    color = LdtkColor.from_hex("#ff0000")
    assert (color.r, color.g, color.b) == (255, 0, 0)
    assert color.a == 255


def test_from_hex_accepts_both_cases():
    assert LdtkColor.from_hex("#A0b0C0") == LdtkColor(0xA0, 0xB0, 0xC0)


def test_to_hex_writes_lowercase_rrggbb():
    assert LdtkColor(10, 171, 255).to_hex() == "#0aabff"
    assert LdtkColor.from_hex("#ABCDEF").to_hex() == "#abcdef"


def test_to_rgba_floats_scales_channels():
    assert LdtkColor(255, 0, 51).to_rgba_floats() == (1.0, 0.0, 0.2, 1.0)


@pytest.mark.parametrize(
    "text",
    ["#zzzzzz", "ff0000", "#ff000", "#ff00000", "", "#ff00 0", "0xff0000"],
)
def test_from_hex_rejects_malformed_strings(text):
    with pytest.raises(MalformedColorError) as caught:
        LdtkColor.from_hex(text)
    assert caught.value.text == text


def test_malformed_color_is_a_decode_error():
    with pytest.raises(LdtkDecodeError, match="Malformed color"):
        LdtkColor.from_hex("#12345g")
