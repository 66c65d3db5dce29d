from touchup_editor.utils.helpers import clamp, clamp_float, hex_to_rgb, human_readable_size, rgb_to_hex
from touchup_editor.utils.validators import (
    validate_diameter,
    validate_opacity,
    validate_rgb,
    validate_tolerance,
)


def test_hex_round_trip_lowercase():
    assert rgb_to_hex((255, 8, 171)) == "#ff08ab"
    assert hex_to_rgb("#FF08AB") == (255, 8, 171)


def test_hex_without_hash_is_accepted():
    assert hex_to_rgb("00ff00") == (0, 255, 0)


def test_malformed_hex_is_black():
    assert hex_to_rgb("#fff") == (0, 0, 0)
    assert hex_to_rgb("not a color") == (0, 0, 0)
    assert hex_to_rgb("") == (0, 0, 0)


def test_clamps():
    assert clamp(300, 0, 255) == 255
    assert clamp(-4, 0, 255) == 0
    assert clamp_float(7.5, 0.1, 5.0) == 5.0


def test_tool_parameter_ranges():
    assert validate_diameter(0) == 1
    assert validate_diameter(250) == 100
    assert validate_opacity(0.0) == 0.1
    assert validate_opacity(3) == 1.0
    assert validate_tolerance(-1) == 0
    assert validate_tolerance(101) == 100
    assert validate_rgb((300, -2, 12)) == (255, 0, 12)


def test_human_readable_size():
    assert human_readable_size(512) == "512.00 B"
    assert human_readable_size(2048) == "2.00 KB"
