"""Blocking client for the pixelflut remote-canvas line protocol."""

from .core import Client
from .protocol import (
    Color,
    GetPixel,
    GetSize,
    Help,
    PixelflutError,
    PixelResponse,
    Position,
    RawResponse,
    SetPixel,
    Size,
    SizeResponse,
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Color",
    "GetPixel",
    "GetSize",
    "Help",
    "PixelflutError",
    "PixelResponse",
    "Position",
    "RawResponse",
    "SetPixel",
    "Size",
    "SizeResponse",
]
