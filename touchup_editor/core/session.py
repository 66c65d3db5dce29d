import logging
import sys

from PIL import Image

from touchup_editor.core.editor_tools import HistoryStack, ToolConfig, ToolType
from touchup_editor.core.image_handler import decode_image, encode_png
from touchup_editor.core.shortcuts import ShortcutSubscription
from touchup_editor.core.tool_controller import ToolController
from touchup_editor.core.viewport import ViewportTransform

logger = logging.getLogger(__name__)

if sys.platform == "darwin":
    DEFAULT_UNDO_SEQUENCES = ("<Control-z>", "<Command-z>")
else:
    DEFAULT_UNDO_SEQUENCES = ("<Control-z>",)

MODE_LABELS = {
    ToolType.BRUSH: "DRAW",
    ToolType.ERASER: "ERASE",
    ToolType.BUCKET: "FILL",
    ToolType.PICKER: "PICK COLOR",
    ToolType.PAN: "PAN",
}

CURSORS = {
    ToolType.BRUSH: "crosshair",
    ToolType.ERASER: "crosshair",
    ToolType.BUCKET: "spraycan",
    ToolType.PICKER: "crosshair",
    ToolType.PAN: "hand2",
}


class EditorSession:
    """
    One hand-editing pass over a single image.

    Owns the raster, the viewport, the tool settings and the undo history.
    Exactly one of on_save(png_bytes) / on_cancel() fires, once; after that
    the session ignores further input.
    """

    def __init__(self, source, on_save, on_cancel, view_size=None, shortcut_host=None,
                 tool_config: ToolConfig | None = None, on_status=None, on_change=None,
                 undo_sequences=DEFAULT_UNDO_SEQUENCES):
        if isinstance(source, Image.Image):
            # convert() always returns a new image, so the caller's copy is untouched.
            self.raster = source.convert("RGBA")
        else:
            self.raster = decode_image(source)

        self._on_save = on_save
        self._on_cancel = on_cancel
        self.on_status = on_status or (lambda text: None)
        self.on_change = on_change or (lambda: None)

        self.viewport = ViewportTransform()
        if view_size:
            self.viewport.fit(self.raster.size, view_size)
        self.tool_config = tool_config or ToolConfig()
        self.history = HistoryStack()
        self.history.checkpoint(self.raster)
        self.controller = ToolController(self.raster, self.tool_config, self.viewport, self.history,
                                         on_status=self.on_status)

        self._shortcut = None
        if shortcut_host is not None:
            self._shortcut = ShortcutSubscription(shortcut_host, undo_sequences, self.undo)
            self._shortcut.attach()

        self._active = True
        logger.info("Editor session started (%dx%d)", self.raster.width, self.raster.height)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ---------- State ----------
    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def size(self) -> tuple[int, int]:
        return self.raster.size

    @property
    def can_undo(self) -> bool:
        return self._active and self.history.can_undo

    @property
    def mode_label(self) -> str:
        return MODE_LABELS[self.tool_config.tool]

    @property
    def zoom_percent(self) -> int:
        return self.viewport.zoom_percent

    @property
    def cursor_name(self) -> str:
        if self.tool_config.tool is ToolType.PAN and self.controller.is_dragging:
            return "fleur"
        return CURSORS[self.tool_config.tool]

    def set_tool(self, tool: ToolType):
        self.tool_config.set_tool(tool)
        self.on_status(f"Tool: {self.tool_config.tool.value}")

    # ---------- Input ----------
    def pointer_down(self, x: float, y: float):
        if self._active:
            self.controller.pointer_down(x, y)

    def pointer_move(self, x: float, y: float):
        if self._active:
            self.controller.pointer_move(x, y)

    def pointer_up(self):
        if self._active:
            self.controller.pointer_up()

    def wheel(self, delta_y: float):
        if self._active:
            self.viewport.zoom_wheel(delta_y)

    def zoom_in(self):
        if self._active:
            self.viewport.zoom_in()

    def zoom_out(self):
        if self._active:
            self.viewport.zoom_out()

    def reset_zoom(self):
        if self._active:
            self.viewport.reset_zoom()

    def fit_to_view(self, view_size: tuple[int, int]):
        if self._active:
            self.viewport.fit(self.raster.size, view_size)

    def undo(self) -> bool:
        if not self._active:
            return False
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.raster.paste(snapshot, (0, 0))
        self.on_status("Undo")
        self.on_change()
        return True

    # ---------- Lifecycle ----------
    def _end(self):
        if self._shortcut is not None:
            self._shortcut.detach()
        self._active = False
        self.controller.pointer_up()
        self.history.clear()

    def save(self):
        if not self._active:
            logger.warning("save() on a finished session ignored")
            return
        data = encode_png(self.raster)
        self._end()
        logger.info("Session saved (%d bytes)", len(data))
        self._on_save(data)

    def cancel(self):
        if not self._active:
            logger.warning("cancel() on a finished session ignored")
            return
        self._end()
        logger.info("Session cancelled")
        self._on_cancel()

    def close(self):
        """
        Tear down without notifying the caller, e.g. when the host window dies.
        """
        if self._active:
            self._end()
            logger.info("Session closed")
