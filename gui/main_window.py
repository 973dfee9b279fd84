"""Main application window: menu bar, toolbar, two-pane layout, status bar."""

import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from export.generation_client import GenerationClient
from gui.canvas_view import CanvasView
from gui.dialogs import GenerationProgressDialog, PromptDialog
from gui.tool_panel import ToolPanel
from models.editor_config import EditorConfig
from models.errors import InvalidImage
from models.tools import ToolType
from utils.image_io import data_url_to_image, load_image

logger = logging.getLogger(__name__)


class MainWindow:
    """Top-level application window."""

    def __init__(self, root: tk.Tk, config: EditorConfig):
        self.root = root
        self.root.title("Mask Painter")
        self.root.geometry("1000x640")
        self.root.minsize(700, 450)

        self.config = config
        self.client = GenerationClient.from_config(config)

        self._build_menu()
        self._build_toolbar()
        self._build_main_panes()
        self._build_status_bar()

        # Wire up callbacks
        self._connect_callbacks()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_menu(self):
        menubar = tk.Menu(self.root)
        self.root.config(menu=menubar)

        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open Image...", command=self._open_image)
        file_menu.add_separator()
        file_menu.add_command(label="Save Image...", command=lambda: self._save_export(0))
        file_menu.add_command(label="Save Mask...", command=lambda: self._save_export(1))
        file_menu.add_separator()
        file_menu.add_command(label="Generate...", command=self._generate)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.root.quit)
        menubar.add_cascade(label="File", menu=file_menu)

        edit_menu = tk.Menu(menubar, tearoff=0)
        edit_menu.add_command(label="Brush", accelerator="B",
                              command=lambda: self._switch_tool(ToolType.BRUSH))
        edit_menu.add_command(label="Eraser", accelerator="E",
                              command=lambda: self._switch_tool(ToolType.ERASER))
        edit_menu.add_separator()
        edit_menu.add_command(label="Clear Mask", command=self._clear_mask)
        menubar.add_cascade(label="Edit", menu=edit_menu)

        help_menu = tk.Menu(menubar, tearoff=0)
        help_menu.add_command(label="About", command=self._show_about)
        menubar.add_cascade(label="Help", menu=help_menu)

        self.root.bind("<KeyPress-b>", lambda e: self._switch_tool(ToolType.BRUSH))
        self.root.bind("<KeyPress-e>", lambda e: self._switch_tool(ToolType.ERASER))

    def _build_toolbar(self):
        toolbar = ttk.Frame(self.root, style="Toolbar.TFrame")
        toolbar.pack(fill=tk.X, pady=(0, 1))

        pad = dict(padx=2, pady=4)
        ttk.Button(toolbar, text="Open Image", style="Toolbar.TButton",
                   command=self._open_image).pack(side=tk.LEFT, **pad)

        ttk.Separator(toolbar, orient=tk.VERTICAL).pack(side=tk.LEFT, fill=tk.Y, padx=6, pady=4)

        ttk.Button(toolbar, text="Save Image", style="Toolbar.TButton",
                   command=lambda: self._save_export(0)).pack(side=tk.LEFT, **pad)
        ttk.Button(toolbar, text="Save Mask", style="Toolbar.TButton",
                   command=lambda: self._save_export(1)).pack(side=tk.LEFT, **pad)

        ttk.Separator(toolbar, orient=tk.VERTICAL).pack(side=tk.LEFT, fill=tk.Y, padx=6, pady=4)

        ttk.Button(toolbar, text="Generate", style="Accent.TButton",
                   command=self._generate).pack(side=tk.LEFT, **pad)

    def _build_main_panes(self):
        container = ttk.Frame(self.root)
        container.pack(fill=tk.BOTH, expand=True)

        # Tool panel (left)
        self.tool_panel = ToolPanel(container, self.config)
        self.tool_panel.pack(side=tk.LEFT, fill=tk.Y, padx=(6, 3), pady=6)

        # Vertical separator
        ttk.Separator(container, orient=tk.VERTICAL).pack(side=tk.LEFT, fill=tk.Y, pady=6)

        # Canvas (right)
        self.canvas_view = CanvasView(container, self.config)
        self.canvas_view.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(3, 6), pady=6)

    def _build_status_bar(self):
        status_frame = ttk.Frame(self.root, style="Status.TFrame")
        status_frame.pack(fill=tk.X, side=tk.BOTTOM)
        self.status_bar = ttk.Label(
            status_frame, text="Ready", style="Status.TLabel", padding=(8, 4)
        )
        self.status_bar.pack(fill=tk.X)

    # ------------------------------------------------------------------
    # Callbacks Wiring
    # ------------------------------------------------------------------

    def _connect_callbacks(self):
        self.tool_panel.on_tool_changed = self._on_tool_changed
        self.tool_panel.on_clear_mask = self._clear_mask

    def _on_tool_changed(self, tool: ToolType, brush_size: float):
        self.canvas_view.select_tool(tool, brush_size)
        self._update_status()

    def _switch_tool(self, tool: ToolType):
        self.tool_panel.set_tool(tool, self.tool_panel.brush_size)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _open_image(self):
        path = filedialog.askopenfilename(
            title="Select Image",
            filetypes=[
                ("Image files", "*.png *.jpg *.jpeg *.bmp *.tiff *.gif *.webp"),
                ("All files", "*.*"),
            ],
        )
        if not path:
            return
        try:
            img = load_image(path, max_pixels=self.config.max_image_pixels)
        except InvalidImage as e:
            messagebox.showerror("Error", f"Could not open image:\n{e}")
            return

        self.canvas_view.load_image(img)
        self.canvas_view.select_tool(self.tool_panel.tool, self.tool_panel.brush_size)
        logger.info("Opened %s", path)
        self._update_status()

    def _save_export(self, which: int):
        """Save the exported image (0) or mask (1) as a PNG."""
        exported = self.canvas_view.export_images()
        if exported is None:
            messagebox.showwarning("No Image", "Please open an image first.")
            return
        label = "Mask" if which else "Image"
        path = filedialog.asksaveasfilename(
            title=f"Save {label}",
            defaultextension=".png",
            filetypes=[("PNG files", "*.png")],
        )
        if not path:
            return
        try:
            data_url_to_image(exported[which]).save(path, format="PNG")
            self._set_status(f"{label} saved: {path}")
        except (OSError, InvalidImage) as e:
            messagebox.showerror("Error", f"Could not save {label.lower()}:\n{e}")

    def _clear_mask(self):
        self.canvas_view.clear_mask()
        self._set_status("Mask cleared")

    def _generate(self):
        editor = self.canvas_view.editor
        if editor is None:
            messagebox.showwarning("No Image", "Please open an image first.")
            return

        prompt_dialog = PromptDialog(self.root)
        self.root.wait_window(prompt_dialog)
        if prompt_dialog.prompt is None:
            return

        prompt, seed = prompt_dialog.prompt, prompt_dialog.seed

        # The progress dialog grabs input, so no strokes land while the editor exports.
        def generate_func(on_progress, is_cancelled):
            return self.client.generate(editor, prompt, seed,
                                        on_progress=on_progress, is_cancelled=is_cancelled)

        dialog = GenerationProgressDialog(self.root, generate_func)
        self.root.wait_window(dialog)

        if dialog.result is not None:
            self.canvas_view.load_image(dialog.result)
            self._set_status(f"Generated image for seed {seed}")
        elif dialog.cancelled:
            self._set_status("Generation cancelled.")

    def _show_about(self):
        messagebox.showinfo(
            "About",
            "Mask Painter\n\n"
            "Paint a mask over an image with brush and eraser,\n"
            "then send both to the generation service.",
        )

    # ------------------------------------------------------------------
    # Status bar
    # ------------------------------------------------------------------

    def _update_status(self):
        parts = []
        editor = self.canvas_view.editor
        if editor is not None:
            w, h = editor.image_size
            parts.append(f"Image: {w}x{h}")
            parts.append(f"Tool: {editor.tool.label} ({editor.brush_size:.0f} px)")
        self.status_bar.config(text=" | ".join(parts) if parts else "Ready")

    def _set_status(self, text: str):
        self.status_bar.config(text=text)
