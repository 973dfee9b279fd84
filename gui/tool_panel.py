"""Side panel: tool palette and brush size."""

import tkinter as tk
from tkinter import ttk
from typing import Optional, Callable

from models.editor_config import EditorConfig
from models.tools import ToolType


class ToolPanel(ttk.Frame):
    """Left-side panel for picking the active tool and its radius."""

    MIN_BRUSH = 1
    MAX_BRUSH = 200

    def __init__(self, parent, config: EditorConfig, **kwargs):
        super().__init__(parent, width=180, style="Panel.TFrame", **kwargs)
        self.pack_propagate(False)

        self.config = config

        # Callbacks
        self.on_tool_changed: Optional[Callable[[ToolType, float], None]] = None
        self.on_clear_mask: Optional[Callable[[], None]] = None

        self._tool_var = tk.StringVar(value=config.tool.value)
        self._size_var = tk.DoubleVar(value=config.default_brush_size)

        self._build_ui()

    def _build_ui(self):
        pad = dict(padx=8, pady=3)

        # --- Tools ---
        tools_frame = ttk.LabelFrame(self, text="Tools", padding=(8, 6))
        tools_frame.pack(fill=tk.X, **pad)

        for tool in ToolType:
            rb = ttk.Radiobutton(
                tools_frame, text=tool.label, value=tool.value,
                variable=self._tool_var, command=self._apply_changes,
            )
            rb.pack(anchor=tk.W, pady=1)
            if not tool.draws:
                # Reserved tools are listed but not selectable yet
                rb.state(["disabled"])

        # --- Brush ---
        brush_frame = ttk.LabelFrame(self, text="Brush Size", padding=(8, 6))
        brush_frame.pack(fill=tk.X, **pad)

        self._size_label = ttk.Label(brush_frame, style="Panel.TLabel")
        self._size_label.pack(anchor=tk.W)

        ttk.Scale(
            brush_frame, from_=self.MIN_BRUSH, to=self.MAX_BRUSH,
            variable=self._size_var, orient=tk.HORIZONTAL,
            command=lambda v: self._apply_changes(),
        ).pack(fill=tk.X, pady=(2, 0))

        # --- Mask ---
        mask_frame = ttk.LabelFrame(self, text="Mask", padding=(8, 6))
        mask_frame.pack(fill=tk.X, **pad)
        ttk.Button(mask_frame, text="Clear Mask", command=self._clear_mask).pack(fill=tk.X)

        self._update_size_label()

    @property
    def tool(self) -> ToolType:
        return ToolType.parse(self._tool_var.get())

    @property
    def brush_size(self) -> float:
        return round(self._size_var.get())

    def set_tool(self, tool: ToolType, brush_size: float):
        self._tool_var.set(tool.value)
        self._size_var.set(brush_size)
        self._apply_changes()

    def _update_size_label(self):
        self._size_label.config(text=f"Radius: {self.brush_size:.0f} px")

    def _apply_changes(self):
        self._update_size_label()
        if self.on_tool_changed:
            self.on_tool_changed(self.tool, self.brush_size)

    def _clear_mask(self):
        if self.on_clear_mask:
            self.on_clear_mask()
