import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from PIL import Image

from touchup_editor.utils.helpers import rgb_to_hex
from touchup_editor.utils.validators import (
    validate_diameter,
    validate_opacity,
    validate_rgb,
    validate_tolerance,
)

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20
FILL_NOOP_THRESHOLD = 5  # per channel, strictly below counts as "same color"


class ToolType(Enum):
    BRUSH = "brush"
    ERASER = "eraser"
    BUCKET = "bucket"
    PICKER = "picker"
    PAN = "pan"


@dataclass
class ToolConfig:
    """
    Active tool and its parameters. Every setter clamps to the UI range,
    so the engines below can trust what they read here.
    """
    tool: ToolType = ToolType.BRUSH
    color: tuple[int, int, int] = (255, 255, 255)
    brush_diameter: int = 10
    opacity: float = 1.0
    tolerance: int = 30

    def __post_init__(self):
        self.tool = ToolType(self.tool)
        self.color = validate_rgb(self.color)
        self.brush_diameter = validate_diameter(self.brush_diameter)
        self.opacity = validate_opacity(self.opacity)
        self.tolerance = validate_tolerance(self.tolerance)

    def set_tool(self, tool: ToolType):
        self.tool = ToolType(tool)

    def set_color(self, rgb):
        self.color = validate_rgb(rgb)

    def set_brush_diameter(self, diameter: int):
        self.brush_diameter = validate_diameter(diameter)

    def set_opacity(self, opacity: float):
        self.opacity = validate_opacity(opacity)

    def set_tolerance(self, tolerance: int):
        self.tolerance = validate_tolerance(tolerance)

    @property
    def hex_color(self) -> str:
        return rgb_to_hex(self.color)

    @property
    def fill_rgba(self) -> tuple[int, int, int, int]:
        r, g, b = self.color
        return (r, g, b, round(self.opacity * 255))


@dataclass
class HistoryStack:
    """
    Step-back history of full raster snapshots, oldest first.

    The first entry is the baseline and is never removed by undo(). There is
    no redo: an undone state is gone.
    """
    limit: int = HISTORY_LIMIT
    _stack: list = field(default_factory=list, init=False, repr=False)

    def __len__(self):
        return len(self._stack)

    def push(self, snapshot: Image.Image):
        self._stack.append(snapshot)
        if len(self._stack) > self.limit:
            self._stack.pop(0)
            logger.debug("History full, evicted oldest snapshot")

    def checkpoint(self, image: Image.Image):
        # Snapshots must never alias the live raster.
        self.push(image.copy())

    def undo(self) -> Optional[Image.Image]:
        if len(self._stack) <= 1:
            return None
        self._stack.pop()
        return self._stack[-1]

    @property
    def can_undo(self) -> bool:
        return len(self._stack) > 1

    @property
    def latest(self) -> Optional[Image.Image]:
        return self._stack[-1] if self._stack else None

    def clear(self):
        self._stack.clear()


# ---------- Brush / eraser ----------

def _circle_spans(cx: float, cy: float, radius: float, width: int, height: int):
    """
    Horizontal runs (row, x_start, x_end inclusive) of pixels whose centres
    (px + 0.5, py + 0.5) lie within radius of (cx, cy), clipped to the image.
    Pixel (px, py) covers the square [px, px + 1) x [py, py + 1), the same
    cell pick_color and flood_fill read for a point inside it.
    """
    spans = []
    top = max(0, math.ceil(cy - radius - 0.5))
    bottom = min(height - 1, math.floor(cy + radius - 0.5))
    r2 = radius * radius
    for py in range(top, bottom + 1):
        dy = py + 0.5 - cy
        rem = r2 - dy * dy
        if rem < 0:
            continue
        half = math.sqrt(rem)
        x0 = max(0, math.ceil(cx - half - 0.5))
        x1 = min(width - 1, math.floor(cx + half - 0.5))
        if x0 <= x1:
            spans.append((py, x0, x1))
    return spans


def stamp(image: Image.Image, x: float, y: float, diameter: int,
          color: tuple[int, int, int] = (0, 0, 0), opacity: float = 1.0, erase: bool = False) -> bool:
    """
    Composite one filled circle of the given diameter centered at image-space
    (x, y). Paint blends source-over at `opacity`; erase drops alpha to 0 at
    full strength. Returns False when the circle misses the image entirely.
    """
    spans = _circle_spans(x, y, diameter / 2, image.width, image.height)
    if not spans:
        return False

    left = min(s[1] for s in spans)
    right = max(s[2] for s in spans)
    top = spans[0][0]
    bottom = spans[-1][0]
    box = (left, top, right + 1, bottom + 1)

    value = 255 if erase else round(opacity * 255)
    mask = Image.new("L", (box[2] - left, box[3] - top), 0)
    for py, x0, x1 in spans:
        mask.paste(value, (x0 - left, py - top, x1 - left + 1, py - top + 1))

    region = image.crop(box)
    if erase:
        alpha = region.getchannel("A")
        alpha.paste(0, (0, 0), mask)
        region.putalpha(alpha)
    else:
        r, g, b = color[:3]
        tip = Image.new("RGBA", region.size, (r, g, b, 0))
        tip.putalpha(mask)
        region = Image.alpha_composite(region, tip)
    image.paste(region, box[:2])
    return True


def stroke_segment(image: Image.Image, p0: tuple[float, float], p1: tuple[float, float], diameter: int,
                   color: tuple[int, int, int] = (0, 0, 0), opacity: float = 1.0, erase: bool = False) -> int:
    """
    Stamp every 1px step from p0 towards p1 so fast pointer motion leaves no
    gaps. The end point is stamped too when the distance is fractional.
    """
    x0, y0 = p0
    x1, y1 = p1
    dist = math.hypot(x1 - x0, y1 - y0)
    angle = math.atan2(y1 - y0, x1 - x0)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    count = 0
    steps = int(math.floor(dist))
    for i in range(steps + 1):
        stamp(image, x0 + cos_a * i, y0 + sin_a * i, diameter, color, opacity, erase)
        count += 1
    if dist > steps:
        stamp(image, x1, y1, diameter, color, opacity, erase)
        count += 1
    return count


# ---------- Color picker ----------

def pick_color(image: Image.Image, x: float, y: float) -> tuple[int, int, int]:
    ix, iy = math.floor(x), math.floor(y)
    if not (0 <= ix < image.width and 0 <= iy < image.height):
        # Off-raster samples read as transparent black.
        return (0, 0, 0)
    r, g, b, _ = image.getpixel((ix, iy))
    return (r, g, b)


# ---------- Flood fill ----------

def flood_fill(image: Image.Image, seed: tuple[float, float], fill_color: tuple[int, int, int, int],
               tolerance: int = 0) -> int:
    """
    Iterative scan-line flood fill over the raw RGBA buffer.

    A pixel joins the region when its 4-channel Euclidean distance to the
    seed pixel is <= tolerance * 2. Matching pixels are overwritten (not
    blended) with fill_color. Returns the number of pixels written.
    """
    w, h = image.size
    sx, sy = math.floor(seed[0]), math.floor(seed[1])
    if not (0 <= sx < w and 0 <= sy < h):
        return 0

    data = bytearray(image.tobytes())
    start = (sy * w + sx) * 4
    tr, tg, tb, ta = data[start:start + 4]
    fill = bytes(fill_color[:4])

    if all(abs(t - f) < FILL_NOOP_THRESHOLD for t, f in zip((tr, tg, tb, ta), fill)):
        logger.debug("Fill color matches target, nothing to do")
        return 0

    limit = (tolerance * 2) ** 2
    filled = bytearray(w * h)

    def matches(idx):
        if filled[idx]:
            return False
        p = idx * 4
        dr = data[p] - tr
        dg = data[p + 1] - tg
        db = data[p + 2] - tb
        da = data[p + 3] - ta
        return dr * dr + dg * dg + db * db + da * da <= limit

    count = 0
    stack = [(sx, sy)]
    while stack:
        x, y = stack.pop()
        idx = y * w + x
        if not matches(idx):
            continue

        while y > 0 and matches(idx - w):
            y -= 1
            idx -= w

        reach_left = False
        reach_right = False
        while y < h and matches(idx):
            p = idx * 4
            data[p:p + 4] = fill
            filled[idx] = 1
            count += 1

            if x > 0:
                if matches(idx - 1):
                    if not reach_left:
                        stack.append((x - 1, y))
                        reach_left = True
                elif reach_left:
                    reach_left = False

            if x < w - 1:
                if matches(idx + 1):
                    if not reach_right:
                        stack.append((x + 1, y))
                        reach_right = True
                elif reach_right:
                    reach_right = False

            y += 1
            idx += w

    image.frombytes(bytes(data))
    logger.debug("Flood fill at (%d, %d) wrote %d pixels", sx, sy, count)
    return count
