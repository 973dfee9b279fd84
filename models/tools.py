"""Tool types and the current tool selection."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ToolType(str, Enum):
    """Every tool the palette knows about.

    Only BRUSH and ERASER draw; the rest are reserved and ignore pointer updates.
    """
    BRUSH = "brush"
    ERASER = "eraser"
    WAND = "wand"
    RECTANGLE_SELECT = "rectangle_select"
    LASSO = "lasso"
    COLOR_PICKER = "color_picker"
    PAINT_BUCKET = "paint_bucket"
    PAN = "pan"

    @property
    def draws(self) -> bool:
        return self in (ToolType.BRUSH, ToolType.ERASER)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: Union["ToolType", str]) -> "ToolType":
        """Accept an enum member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for tool in cls:
                if key in (tool.value, tool.name.lower()):
                    return tool
        raise ValueError(f"Unknown tool: {value!r}")


@dataclass(frozen=True)
class ToolSelection:
    """Active tool plus its brush radius in viewport pixels."""
    tool: ToolType = ToolType.BRUSH
    brush_size: float = 20.0

    def to_dict(self) -> dict:
        return {"tool": self.tool.value, "brush_size": self.brush_size}
