"""In-memory application state singleton for the web mask editor."""

import sys
import os
import threading
from typing import Optional

# Add parent directory so we can import shared modules
app_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if app_dir not in sys.path:
    sys.path.insert(0, app_dir)

from editor.image_editor import ImageEditor
from models.editor_config import EditorConfig, load_config
from models.surface import Surface


class AppState:
    """Holds all session state: config, the bound viewport and the editor."""

    def __init__(self, config: Optional[EditorConfig] = None):
        self.config: EditorConfig = config or load_config()
        self.viewport: Surface = Surface.for_canvas(
            self.config.viewport_width, self.config.viewport_height
        )
        self.editor: Optional[ImageEditor] = None
        self.image_filename: str = ""
        # Generation tasks: {task_id: {"status": str, "progress": int, "error": str}}
        self.generate_tasks: dict = {}
        # The editor is single-threaded; every request touching it holds this lock.
        self.lock = threading.RLock()

    def reset(self, config: Optional[EditorConfig] = None):
        if config is not None:
            self.config = config
        self.viewport = Surface.for_canvas(
            self.config.viewport_width, self.config.viewport_height
        )
        self.editor = None
        self.image_filename = ""
        self.generate_tasks = {}


# Module-level singleton
state = AppState()
