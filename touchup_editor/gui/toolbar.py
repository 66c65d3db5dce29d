import tkinter as tk
from tkinter import ttk, colorchooser

from touchup_editor.core.editor_tools import ToolConfig, ToolType
from touchup_editor.utils.helpers import rgb_to_hex


class ToolBar(ttk.Frame):
    def __init__(self, parent, on_tool_change, on_color_change, on_size_change, on_opacity_change,
                 on_tolerance_change, on_zoom, on_undo, on_cancel, on_save):
        super().__init__(parent, padding=10)
        self.on_tool_change = on_tool_change
        self.on_color_change = on_color_change
        self.on_size_change = on_size_change
        self.on_opacity_change = on_opacity_change
        self.on_tolerance_change = on_tolerance_change
        self.on_zoom = on_zoom
        self.on_undo = on_undo
        self.on_cancel = on_cancel
        self.on_save = on_save
        self.current_color = (255, 255, 255)
        self._build_ui()

    def _build_ui(self):
        ttk.Label(self, text="Hand Edit", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        ttk.Label(self, text="Touch up inconsistencies").pack(anchor="w", pady=(0, 10))

        tool_frame = ttk.LabelFrame(self, text="Tools", padding=6)
        tool_frame.pack(fill="x", pady=(0, 8))
        self.tool_var = tk.StringVar(value=ToolType.BRUSH.value)
        tools = [
            ("Brush (B)", ToolType.BRUSH),
            ("Bucket (G)", ToolType.BUCKET),
            ("Eraser (E)", ToolType.ERASER),
            ("Picker (I)", ToolType.PICKER),
            ("Pan (H)", ToolType.PAN),
        ]
        for label, tool in tools:
            ttk.Radiobutton(tool_frame, text=label, value=tool.value, variable=self.tool_var,
                            command=lambda t=tool: self.on_tool_change(t)).pack(anchor="w")

        color_frame = ttk.Frame(self)
        color_frame.pack(fill="x", pady=(0, 8))
        ttk.Label(color_frame, text="Color").pack(side="left", padx=(0, 6))
        self.color_preview = tk.Canvas(color_frame, width=40, height=20, highlightthickness=1,
                                       highlightbackground="#666")
        self.color_preview.pack(side="left", padx=(0, 6))
        self.color_preview.bind("<Button-1>", self._choose_color)
        self.color_label = ttk.Label(color_frame, text="#ffffff", font=("TkFixedFont", 9))
        self.color_label.pack(side="left")

        self.size_var = tk.IntVar(value=10)
        self._scale_row("Size", self.size_var, 1, 100, lambda v: self.on_size_change(int(float(v))))
        self.opacity_var = tk.DoubleVar(value=1.0)
        self._scale_row("Opacity", self.opacity_var, 0.1, 1.0, lambda v: self.on_opacity_change(float(v)))
        self.tol_var = tk.IntVar(value=30)
        self._scale_row("Tolerance", self.tol_var, 0, 100, lambda v: self.on_tolerance_change(int(float(v))))

        zoom_frame = ttk.LabelFrame(self, text="Zoom", padding=6)
        zoom_frame.pack(fill="x", pady=(8, 8))
        self.zoom_label = ttk.Label(zoom_frame, text="100%")
        self.zoom_label.pack(anchor="w")
        btns = ttk.Frame(zoom_frame)
        btns.pack(fill="x")
        ttk.Button(btns, text="-", width=3, command=lambda: self.on_zoom("out")).pack(side="left")
        ttk.Button(btns, text="+", width=3, command=lambda: self.on_zoom("in")).pack(side="left", padx=4)
        ttk.Button(btns, text="Reset", command=lambda: self.on_zoom("reset")).pack(side="left", fill="x", expand=True)
        ttk.Label(zoom_frame, text="Use mouse wheel to zoom").pack(anchor="w", pady=(4, 0))

        self.undo_btn = ttk.Button(self, text="Undo (Ctrl+Z)", command=self.on_undo)
        self.undo_btn.pack(fill="x", side="bottom", pady=(8, 0))
        actions = ttk.Frame(self)
        actions.pack(fill="x", side="bottom")
        ttk.Button(actions, text="Cancel", command=self.on_cancel).pack(side="left", fill="x", expand=True)
        ttk.Button(actions, text="Save", command=self.on_save).pack(side="left", fill="x", expand=True, padx=(6, 0))

        self._update_color_preview()

    def _scale_row(self, label, var, lo, hi, command):
        frame = ttk.Frame(self)
        frame.pack(fill="x", pady=2)
        ttk.Label(frame, text=label, width=10).pack(side="left")
        ttk.Scale(frame, from_=lo, to=hi, orient="horizontal", variable=var,
                  command=command).pack(side="left", fill="x", expand=True)

    def _choose_color(self, event=None):
        color = colorchooser.askcolor(color=rgb_to_hex(self.current_color), title="Choose Color")
        if color is None or color[0] is None:
            return
        self.current_color = tuple(int(c) for c in color[0])
        self._update_color_preview()
        self.on_color_change(self.current_color)

    def _update_color_preview(self):
        hex_color = rgb_to_hex(self.current_color)
        self.color_preview.configure(bg=hex_color)
        self.color_label.configure(text=hex_color)

    def sync(self, tool_config: ToolConfig, zoom_percent: int, can_undo: bool):
        """Reflect settings changed from the canvas side (picker, wheel zoom)."""
        self.tool_var.set(tool_config.tool.value)
        self.size_var.set(tool_config.brush_diameter)
        self.opacity_var.set(tool_config.opacity)
        self.tol_var.set(tool_config.tolerance)
        if tool_config.color != self.current_color:
            self.current_color = tool_config.color
            self._update_color_preview()
        self.zoom_label.configure(text=f"{zoom_percent}%")
        self.undo_btn.state(["!disabled"] if can_undo else ["disabled"])
