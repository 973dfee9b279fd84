"""Canvas widget that shows the editor's viewport and feeds it mouse strokes."""

import logging
import tkinter as tk
from tkinter import ttk
from PIL import Image, ImageTk
from typing import Optional, Callable, Tuple

from editor.image_editor import ImageEditor, create
from models.editor_config import EditorConfig
from models.surface import Surface
from models.tools import ToolType

logger = logging.getLogger(__name__)


class CanvasView(ttk.Frame):
    """Hosts the viewport surface on a tk.Canvas and forwards pointer events."""

    def __init__(self, parent, config: EditorConfig, **kwargs):
        super().__init__(parent, **kwargs)
        self.config = config
        self.editor: Optional[ImageEditor] = None

        # Callbacks
        self.on_mask_changed: Optional[Callable[[], None]] = None

        # The surface bound to this widget; the editor's compositor writes into it.
        self.viewport = Surface.for_canvas(config.viewport_width, config.viewport_height)
        self._photo: Optional[ImageTk.PhotoImage] = None
        self._resize_job: Optional[str] = None

        self._build_ui()

    def _build_ui(self):
        self.canvas = tk.Canvas(
            self,
            width=self.config.viewport_width,
            height=self.config.viewport_height,
            bg="#d6d6d6",
            highlightthickness=0,
            cursor="crosshair",
        )
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self.canvas.bind("<ButtonPress-1>", self._on_paint)
        self.canvas.bind("<B1-Motion>", self._on_paint)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<Leave>", lambda e: self.canvas.delete("cursor"))
        self.canvas.bind("<Configure>", self._on_canvas_resize)

        self.refresh()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_image(self, img: Image.Image):
        """Start editing img, keeping the current tool if an editor exists."""
        if self.editor is None:
            self.editor = create(
                self.viewport, img,
                self.config.tool, self.config.default_brush_size,
                config=self.config,
            )
        else:
            self.editor.update_image(img)
        self.refresh()

    def select_tool(self, tool: ToolType, brush_size: float):
        if self.editor is not None:
            self.editor.select_tool(tool, brush_size)

    def clear_mask(self):
        if self.editor is not None:
            self.editor.clear_mask()
            self.refresh()

    def export_images(self) -> Optional[Tuple[str, str]]:
        if self.editor is None:
            return None
        return self.editor.export_images()

    def refresh(self):
        """Show the latest composite from the viewport surface."""
        self.canvas.delete("frame", "placeholder")
        if self.editor is None or self.viewport.is_empty:
            cw, ch = self.viewport.size
            self.canvas.create_text(
                cw / 2, ch / 2,
                text="Open an image to start painting a mask",
                fill="#555555", font=("Segoe UI", 11), tags="placeholder",
            )
            return
        self._photo = ImageTk.PhotoImage(self.viewport.image)
        self.canvas.create_image(0, 0, image=self._photo, anchor=tk.NW, tags="frame")
        self.canvas.tag_raise("cursor")

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def _normalize(self, event) -> Tuple[float, float]:
        w = max(1, self.viewport.width)
        h = max(1, self.viewport.height)
        return event.x / w, event.y / h

    def _on_paint(self, event):
        if self.editor is None:
            return
        nx, ny = self._normalize(event)
        if self.editor.update_pointer(nx, ny):
            self.refresh()
            if self.on_mask_changed:
                self.on_mask_changed()
        self._draw_cursor(event.x, event.y)

    def _on_motion(self, event):
        self._draw_cursor(event.x, event.y)

    def _draw_cursor(self, x: float, y: float):
        """Outline the brush footprint under the mouse."""
        self.canvas.delete("cursor")
        if self.editor is None or not self.editor.tool.draws:
            return
        r = self.editor.brush_size
        self.canvas.create_oval(
            x - r, y - r, x + r, y + r,
            outline="#333333", dash=(2, 2), tags="cursor",
        )

    # ------------------------------------------------------------------
    # Resizing
    # ------------------------------------------------------------------

    def _on_canvas_resize(self, event):
        """Resync the viewport once the widget settles on a new size."""
        if self._resize_job is not None:
            self.after_cancel(self._resize_job)
        self._resize_job = self.after(50, self._sync_viewport, event.width, event.height)

    def _sync_viewport(self, width: int, height: int):
        self._resize_job = None
        if (width, height) == self.viewport.size:
            return
        self.viewport.resize(width, height)
        if self.editor is not None:
            self.editor.resize_viewport()
        logger.debug("Viewport resized to %dx%d", width, height)
        self.refresh()
