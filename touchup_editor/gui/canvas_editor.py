import math
import tkinter as tk
from tkinter import ttk

from PIL import Image, ImageTk

from touchup_editor.core.session import EditorSession
from touchup_editor.core.transparency import create_checkerboard
from touchup_editor.core.viewport import wheel_delta


class CanvasEditor(ttk.Frame):
    """
    Tk surface for an EditorSession: forwards mouse input in widget
    coordinates and paints the visible part of the raster at the session's
    pan/zoom.
    """

    def __init__(self, parent, session: EditorSession, on_changed=None, on_cursor=None):
        super().__init__(parent)
        self.session = session
        self.on_changed = on_changed or (lambda: None)
        self.on_cursor = on_cursor or (lambda x, y: None)
        self._display_image = None
        self._first_fit_done = False
        self._build_ui()

    def _build_ui(self):
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(self, bg="#18181b", highlightthickness=0, cursor=self.session.cursor_name)
        self.canvas.grid(row=0, column=0, sticky="nsew")

        self.canvas.bind("<ButtonPress-1>", self._on_mouse_down)
        self.canvas.bind("<B1-Motion>", self._on_mouse_drag)
        self.canvas.bind("<ButtonRelease-1>", self._on_mouse_up)
        self.canvas.bind("<Motion>", self._on_mouse_move)
        self.canvas.bind("<Leave>", lambda e: self.on_cursor(None, None))

        self.canvas.bind("<MouseWheel>", self._on_mouse_wheel)
        self.canvas.bind("<Button-4>", self._on_mouse_wheel)
        self.canvas.bind("<Button-5>", self._on_mouse_wheel)

        self.canvas.bind("<Configure>", self._on_canvas_configure, add="+")

    def _on_canvas_configure(self, event):
        if not self._first_fit_done and event.width > 1 and event.height > 1:
            self.session.fit_to_view((event.width, event.height))
            self._first_fit_done = True
        self.refresh()

    # ---------- Events ----------
    def _on_mouse_down(self, event):
        self.canvas.focus_set()
        self.session.pointer_down(event.x, event.y)
        self._changed()

    def _on_mouse_drag(self, event):
        self.session.pointer_move(event.x, event.y)
        self._report_cursor(event)
        self._changed()

    def _on_mouse_up(self, event):
        self.session.pointer_up()
        self._changed()

    def _on_mouse_move(self, event):
        self._report_cursor(event)

    def _on_mouse_wheel(self, event):
        delta_y = wheel_delta(event.delta, event.num)
        if delta_y:
            self.session.wheel(delta_y)
            self._changed()

    def _report_cursor(self, event):
        ix, iy = self.session.viewport.to_image(event.x, event.y)
        ix, iy = math.floor(ix), math.floor(iy)
        w, h = self.session.size
        if 0 <= ix < w and 0 <= iy < h:
            self.on_cursor(ix, iy)
        else:
            self.on_cursor(None, None)

    def _changed(self):
        self.refresh()
        self.on_changed()

    # ---------- Rendering ----------
    def _visible_box(self):
        vp = self.session.viewport
        w, h = self.session.size
        cw = max(1, self.canvas.winfo_width())
        ch = max(1, self.canvas.winfo_height())
        x0, y0 = vp.to_image(0, 0)
        x1, y1 = vp.to_image(cw, ch)
        box = (
            max(0, math.floor(x0)),
            max(0, math.floor(y0)),
            min(w, math.ceil(x1)),
            min(h, math.ceil(y1)),
        )
        if box[0] >= box[2] or box[1] >= box[3]:
            return None
        return box

    def refresh(self):
        self.canvas.delete("all")
        self.canvas.config(cursor=self.session.cursor_name)
        if not self.session.is_active:
            return
        box = self._visible_box()
        if box is None:
            return
        vp = self.session.viewport
        region = self.session.raster.crop(box)
        bg = create_checkerboard(region.size)
        composed = Image.alpha_composite(bg, region)
        out_w = max(1, round(region.width * vp.scale))
        out_h = max(1, round(region.height * vp.scale))
        resample = Image.Resampling.NEAREST if vp.scale >= 1 else Image.Resampling.BILINEAR
        composed = composed.resize((out_w, out_h), resample)
        left, top = vp.to_display(box[0], box[1])
        self._display_image = ImageTk.PhotoImage(composed)
        self.canvas.create_image(round(left), round(top), image=self._display_image, anchor="nw")
