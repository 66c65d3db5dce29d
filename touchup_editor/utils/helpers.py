import re


_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(v)))


def clamp_float(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, float(v)))


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    r, g, b = rgb[:3]
    return "#%02x%02x%02x" % (r, g, b)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """
    Parse '#rrggbb' (leading '#' optional). Anything else is black.
    """
    m = _HEX_RE.match((value or "").strip())
    if not m:
        return (0, 0, 0)
    return tuple(int(part, 16) for part in m.groups())


def human_readable_size(bytes_count: int) -> str:
    units = ["B", "KB", "MB", "GB"]
    i = 0
    v = float(bytes_count)
    while v >= 1024 and i < len(units) - 1:
        v /= 1024.0
        i += 1
    return f"{v:.2f} {units[i]}"
