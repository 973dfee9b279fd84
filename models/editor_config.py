"""Editor and generation settings with JSON serialization."""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

from models.tools import ToolType

DEFAULT_API_URL = "http://localhost:8000"


def _default_api_url() -> str:
    return os.environ.get("MASK_PAINTER_API_URL", DEFAULT_API_URL)


@dataclass
class EditorConfig:
    """Everything a host needs to build an editor and talk to the generation service."""
    mask_color: str = "#9ACC59"
    mask_opacity: float = 0.4
    default_tool: str = ToolType.BRUSH.value
    default_brush_size: float = 20.0
    viewport_width: int = 700
    viewport_height: int = 500
    max_image_pixels: int = 25_000_000
    position_buffer_size: int = 256

    # Generation service
    generation_url: str = field(default_factory=_default_api_url)
    poll_interval_sec: float = 1.0
    request_timeout_sec: float = 30.0
    max_poll_attempts: int = 600

    @property
    def tool(self) -> ToolType:
        return ToolType.parse(self.default_tool)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "EditorConfig":
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})

    def save_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_json(cls, path: str) -> "EditorConfig":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


def load_config(path: Optional[str] = None) -> EditorConfig:
    """Load settings from path (or MASK_PAINTER_CONFIG); defaults when the file is missing."""
    path = path or os.environ.get("MASK_PAINTER_CONFIG", "")
    if path and Path(path).exists():
        return EditorConfig.load_json(path)
    return EditorConfig()
