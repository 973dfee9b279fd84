"""Exception types raised by the mask editor and its collaborators."""


class EditorError(Exception):
    """Base class for mask editor errors."""


class InvalidImage(EditorError, ValueError):
    """The image has zero width or height, or could not be decoded."""


class GenerationError(EditorError):
    """The generation service rejected a request or never produced a result."""
