import logging
from enum import Enum

from PIL import Image

from touchup_editor.core.editor_tools import (
    HistoryStack,
    ToolConfig,
    ToolType,
    flood_fill,
    pick_color,
    stamp,
    stroke_segment,
)
from touchup_editor.core.viewport import ViewportTransform

logger = logging.getLogger(__name__)


class GestureState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class ToolController:
    """
    Routes pointer events (display coordinates) to the engine for the
    active tool.

    Brush and eraser strokes push one history snapshot when the pointer is
    released. Bucket fills checkpoint before they write. Picker and pan
    never touch history.
    """

    # Method names, resolved per instance. Every ToolType needs a down handler.
    DOWN_HANDLERS = {
        ToolType.BRUSH: "_begin_stroke",
        ToolType.ERASER: "_begin_stroke",
        ToolType.BUCKET: "_fill",
        ToolType.PICKER: "_pick",
        ToolType.PAN: "_begin_pan",
    }
    MOVE_HANDLERS = {
        ToolType.BRUSH: "_continue_stroke",
        ToolType.ERASER: "_continue_stroke",
        ToolType.PAN: "_drag_pan",
    }

    def __init__(self, raster: Image.Image, tool_config: ToolConfig, viewport: ViewportTransform,
                 history: HistoryStack, on_status=None):
        self.raster = raster
        self.tool_config = tool_config
        self.viewport = viewport
        self.history = history
        self.on_status = on_status or (lambda text: None)

        self.state = GestureState.IDLE
        self.stroke_path: list[tuple[float, float]] = []
        self._gesture_tool: ToolType | None = None

        missing = [t.value for t in ToolType if t not in self.DOWN_HANDLERS]
        if missing:
            raise ValueError(f"No pointer handler for tools: {', '.join(missing)}")
        self._down_handlers = {tool: getattr(self, name) for tool, name in self.DOWN_HANDLERS.items()}
        self._move_handlers = {tool: getattr(self, name) for tool, name in self.MOVE_HANDLERS.items()}

    @property
    def last_point(self):
        return self.stroke_path[-1] if self.stroke_path else None

    @property
    def is_dragging(self) -> bool:
        return self.state is GestureState.DRAGGING

    # ---------- Pointer events ----------
    def pointer_down(self, dx: float, dy: float):
        if self.is_dragging:
            # Release was never delivered; close the old gesture first.
            self.pointer_up()
        tool = self.tool_config.tool
        self._gesture_tool = tool
        self._down_handlers[tool](dx, dy)

    def pointer_move(self, dx: float, dy: float):
        if not self.is_dragging:
            return
        handler = self._move_handlers.get(self._gesture_tool)
        if handler is not None:
            handler(dx, dy)

    def pointer_up(self):
        if self.is_dragging and self._gesture_tool in (ToolType.BRUSH, ToolType.ERASER):
            self.history.checkpoint(self.raster)
            logger.debug("Stroke finished with %d points", len(self.stroke_path))
        if self._gesture_tool is ToolType.PAN:
            self.viewport.end_pan()
        self.stroke_path = []
        self._gesture_tool = None
        self.state = GestureState.IDLE

    # ---------- Handlers ----------
    def _stamp_args(self):
        cfg = self.tool_config
        return {
            "diameter": cfg.brush_diameter,
            "color": cfg.color,
            "opacity": cfg.opacity,
            "erase": self._gesture_tool is ToolType.ERASER,
        }

    def _begin_stroke(self, dx, dy):
        point = self.viewport.to_image(dx, dy)
        stamp(self.raster, point[0], point[1], **self._stamp_args())
        self.stroke_path = [point]
        self.state = GestureState.DRAGGING

    def _continue_stroke(self, dx, dy):
        point = self.viewport.to_image(dx, dy)
        last = self.last_point
        if last is None:
            stamp(self.raster, point[0], point[1], **self._stamp_args())
        else:
            stroke_segment(self.raster, last, point, **self._stamp_args())
        self.stroke_path.append(point)

    def _fill(self, dx, dy):
        x, y = self.viewport.to_image(dx, dy)
        self.history.checkpoint(self.raster)
        count = flood_fill(self.raster, (x, y), self.tool_config.fill_rgba, tolerance=self.tool_config.tolerance)
        self.on_status(f"Filled {count} pixels" if count else "Nothing to fill")

    def _pick(self, dx, dy):
        x, y = self.viewport.to_image(dx, dy)
        self.tool_config.set_color(pick_color(self.raster, x, y))
        self.tool_config.set_tool(ToolType.BRUSH)
        self.on_status(f"Picked {self.tool_config.hex_color}")

    def _begin_pan(self, dx, dy):
        self.viewport.begin_pan(dx, dy)
        self.state = GestureState.DRAGGING

    def _drag_pan(self, dx, dy):
        self.viewport.drag_pan(dx, dy)
