from touchup_editor.utils.helpers import clamp, clamp_float

MIN_DIAMETER, MAX_DIAMETER = 1, 100
MIN_OPACITY, MAX_OPACITY = 0.1, 1.0
MIN_TOLERANCE, MAX_TOLERANCE = 0, 100


def validate_diameter(value) -> int:
    return clamp(value, MIN_DIAMETER, MAX_DIAMETER)


def validate_opacity(value) -> float:
    return clamp_float(value, MIN_OPACITY, MAX_OPACITY)


def validate_tolerance(value) -> int:
    return clamp(value, MIN_TOLERANCE, MAX_TOLERANCE)


def validate_rgb(rgb) -> tuple[int, int, int]:
    r, g, b = rgb[:3]
    return (clamp(r, 0, 255), clamp(g, 0, 255), clamp(b, 0, 255))
