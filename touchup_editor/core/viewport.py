import logging
import sys
from typing import Optional

from touchup_editor.utils.helpers import clamp_float

logger = logging.getLogger(__name__)

MIN_SCALE = 0.1
MAX_SCALE = 5.0
WHEEL_FACTOR = 0.001
ZOOM_STEP = 0.1
FIT_RATIO = 0.9
WHEEL_NOTCH = 120
# Tk on macOS reports about 1 to 3 units per notch instead of 120.
DARWIN_WHEEL_SCALE = 40


def wheel_delta(delta: int, num: int = 0, platform: str = sys.platform) -> int:
    """
    Convert a Tk wheel event (event.delta, or button 4/5 on X11) into a
    browser-style delta_y: positive means wheel down, i.e. zoom out.
    """
    if num == 4:
        return -WHEEL_NOTCH
    if num == 5:
        return WHEEL_NOTCH
    if platform == "darwin":
        return -delta * DARWIN_WHEEL_SCALE
    return -delta


class ViewportTransform:
    """
    Pan/zoom mapping between display coordinates and image pixels.

    display = image * scale + pan, so image = (display - pan) / scale.
    scale is clamped to [MIN_SCALE, MAX_SCALE] on every write.
    """

    def __init__(self, scale: float = 1.0, pan_x: float = 0.0, pan_y: float = 0.0):
        self._scale = clamp_float(scale, MIN_SCALE, MAX_SCALE)
        self.pan_x = float(pan_x)
        self.pan_y = float(pan_y)
        self._drag_anchor: Optional[tuple[float, float]] = None

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float):
        self._scale = clamp_float(value, MIN_SCALE, MAX_SCALE)

    def to_image(self, dx: float, dy: float) -> tuple[float, float]:
        return (dx - self.pan_x) / self._scale, (dy - self.pan_y) / self._scale

    def to_display(self, ix: float, iy: float) -> tuple[float, float]:
        return ix * self._scale + self.pan_x, iy * self._scale + self.pan_y

    # ---------- Zoom ----------
    def zoom_by(self, delta: float) -> float:
        self.scale = self._scale + delta
        logger.debug("Zoom %.3f", self._scale)
        return self._scale

    def zoom_wheel(self, delta_y: float) -> float:
        # Wheel up (negative delta_y) zooms in.
        return self.zoom_by(-delta_y * WHEEL_FACTOR)

    def zoom_in(self) -> float:
        return self.zoom_by(ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.zoom_by(-ZOOM_STEP)

    def reset_zoom(self) -> float:
        # Pan is left where it is.
        self.scale = 1.0
        return self._scale

    def fit(self, image_size: tuple[int, int], view_size: tuple[int, int]):
        """
        Center the image in the view at FIT_RATIO of the best-fit scale.
        """
        iw, ih = image_size
        vw, vh = view_size
        if iw <= 0 or ih <= 0 or vw <= 0 or vh <= 0:
            return
        self.scale = min(vw / iw, vh / ih) * FIT_RATIO
        self.pan_x = (vw - iw * self._scale) / 2
        self.pan_y = (vh - ih * self._scale) / 2
        logger.debug("Fit %dx%d into %dx%d at %.3f", iw, ih, vw, vh, self._scale)

    # ---------- Pan ----------
    def begin_pan(self, dx: float, dy: float):
        self._drag_anchor = (dx - self.pan_x, dy - self.pan_y)

    def drag_pan(self, dx: float, dy: float):
        if self._drag_anchor is None:
            return
        ax, ay = self._drag_anchor
        self.pan_x = dx - ax
        self.pan_y = dy - ay

    def end_pan(self):
        self._drag_anchor = None

    @property
    def is_panning(self) -> bool:
        return self._drag_anchor is not None

    @property
    def zoom_percent(self) -> int:
        return round(self._scale * 100)
