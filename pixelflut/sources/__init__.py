from .base import Frame, PixelSource, array_to_messages

__all__ = ["Frame", "PixelSource", "array_to_messages"]
