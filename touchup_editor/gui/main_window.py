import logging
import os
import tkinter as tk
from tkinter import ttk

from touchup_editor.core.editor_tools import ToolConfig, ToolType
from touchup_editor.core.session import EditorSession
from touchup_editor.gui.canvas_editor import CanvasEditor
from touchup_editor.gui.toolbar import ToolBar
from touchup_editor.utils.config import AppConfig

logger = logging.getLogger(__name__)

TOOL_KEYS = {
    "b": ToolType.BRUSH,
    "g": ToolType.BUCKET,
    "e": ToolType.ERASER,
    "i": ToolType.PICKER,
    "h": ToolType.PAN,
}


class MainWindow(tk.Tk):
    """
    Hosts a single EditorSession. Save and cancel both close the window.
    """

    def __init__(self, image, on_save, on_cancel, config: AppConfig | None = None, title: str = "Hand Edit"):
        super().__init__()
        self.title(title)
        self.geometry("1280x860")
        self.minsize(900, 600)

        self.config_mgr = config or AppConfig()
        self._caller_save = on_save
        self._caller_cancel = on_cancel

        self.style = ttk.Style()
        self._apply_theme(self.config_mgr.theme)

        tool_config = ToolConfig(
            color=self.config_mgr.color,
            brush_diameter=self.config_mgr.brush_diameter,
            opacity=self.config_mgr.opacity,
            tolerance=self.config_mgr.tolerance,
        )
        self.session = EditorSession(
            image,
            on_save=self._on_session_save,
            on_cancel=self._on_session_cancel,
            shortcut_host=self,
            tool_config=tool_config,
            on_status=self._update_status,
            on_change=self._on_session_change,
        )

        self._build_statusbar()
        self._build_layout()
        self._bind_tool_keys()
        self._sync()
        self._update_status("Ready")
        self.protocol("WM_DELETE_WINDOW", self.session.cancel)

    # -------------------- Theme --------------------
    def _apply_theme(self, mode: str):
        names = self.style.theme_names()
        if mode.lower() in ("dark", "light"):
            self.style.theme_use("clam")
        elif os.name == "nt" and "vista" in names:
            self.style.theme_use("vista")
        elif "clam" in names:
            self.style.theme_use("clam")
        if mode.lower() == "dark":
            dark_bg = "#27272a"
            fg = "#e4e4e7"
            self.configure(bg=dark_bg)
            for elem in ["TFrame", "TLabelframe", "TLabelframe.Label", "TLabel", "TRadiobutton", "TButton"]:
                self.style.configure(elem, background=dark_bg, foreground=fg)

    # -------------------- Layout --------------------
    def _build_layout(self):
        body = ttk.Frame(self)
        body.pack(side="top", fill="both", expand=True)
        body.columnconfigure(1, weight=1)
        body.rowconfigure(0, weight=1)

        self.toolbar = ToolBar(
            body,
            on_tool_change=self._on_tool_change,
            on_color_change=self.session.tool_config.set_color,
            on_size_change=self.session.tool_config.set_brush_diameter,
            on_opacity_change=self.session.tool_config.set_opacity,
            on_tolerance_change=self.session.tool_config.set_tolerance,
            on_zoom=self._on_zoom,
            on_undo=self._undo,
            on_cancel=self.session.cancel,
            on_save=self.session.save,
        )
        self.toolbar.grid(row=0, column=0, sticky="ns")

        self.canvas_editor = CanvasEditor(body, self.session, on_changed=self._sync, on_cursor=self._update_cursor)
        self.canvas_editor.grid(row=0, column=1, sticky="nsew")

    def _build_statusbar(self):
        bar = ttk.Frame(self, padding=(8, 2))
        bar.pack(side="bottom", fill="x")
        self.status_var = tk.StringVar(value="")
        self.mode_var = tk.StringVar(value="")
        self.cursor_var = tk.StringVar(value="")
        ttk.Label(bar, textvariable=self.status_var).pack(side="left")
        ttk.Label(bar, textvariable=self.cursor_var, width=16).pack(side="right")
        ttk.Label(bar, textvariable=self.mode_var, width=24).pack(side="right")

    def _bind_tool_keys(self):
        for key, tool in TOOL_KEYS.items():
            self.bind(f"<Key-{key}>", lambda e, t=tool: self._on_tool_change(t))

    # -------------------- Callbacks --------------------
    def _update_status(self, text):
        self.status_var.set(text)

    def _update_cursor(self, x, y):
        self.cursor_var.set("" if x is None else f"{x}, {y}")

    def _sync(self):
        if not self.session.is_active:
            return
        self.mode_var.set(f"MODE: {self.session.mode_label}  {self.session.zoom_percent}%")
        self.toolbar.sync(self.session.tool_config, self.session.zoom_percent, self.session.can_undo)

    def _on_tool_change(self, tool: ToolType):
        self.session.set_tool(tool)
        self.canvas_editor.refresh()
        self._sync()

    def _on_zoom(self, action: str):
        if action == "in":
            self.session.zoom_in()
        elif action == "out":
            self.session.zoom_out()
        else:
            self.session.reset_zoom()
        self.canvas_editor.refresh()
        self._sync()

    def _undo(self):
        self.session.undo()

    def _on_session_change(self):
        # Keyboard undo arrives here without going through the canvas.
        if hasattr(self, "canvas_editor"):
            self.canvas_editor.refresh()
            self._sync()

    def _remember(self):
        self.config_mgr.remember_tools(self.session.tool_config)
        self.config_mgr.save()

    def _on_session_save(self, data: bytes):
        self._remember()
        try:
            self._caller_save(data)
        finally:
            self.destroy()

    def _on_session_cancel(self):
        self._remember()
        try:
            self._caller_cancel()
        finally:
            self.destroy()

    def destroy(self):
        self.session.close()
        super().destroy()


def run_app(image, on_save, on_cancel, config: AppConfig | None = None, title: str = "Hand Edit"):
    app = MainWindow(image, on_save, on_cancel, config=config, title=title)
    app.mainloop()
