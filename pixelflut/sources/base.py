from __future__ import annotations

from typing import List, Optional

import numpy as np

from pixelflut.core.frames import Frame, PixelSource
from pixelflut.protocol import Color, Position, SetPixel
from pixelflut.protocol.constants import U32_MAX


def array_to_messages(
    pixels: np.ndarray,
    mask: Optional[np.ndarray] = None,
    offset_x: int = 0,
    offset_y: int = 0,
) -> List[SetPixel]:
    """
    Turn an ``H x W x C`` uint8 image into row-major pixel writes.

    ``C`` is 3 (alpha absent) or 4 (alpha present). When ``mask`` (``H x W``
    of bool) is given, only pixels where it is set are emitted.
    """
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(f"Expected an H x W x 3|4 array, got shape {pixels.shape}")
    height, width = pixels.shape[:2]
    if offset_x < 0 or offset_y < 0:
        raise ValueError(f"Offsets must be non-negative, got ({offset_x}, {offset_y})")
    if offset_x + width - 1 > U32_MAX or offset_y + height - 1 > U32_MAX:
        raise ValueError(f"Offsets ({offset_x}, {offset_y}) push the image past the coordinate range")
    with_alpha = pixels.shape[2] == 4
    if mask is None:
        coords = np.ndindex(height, width)
    else:
        coords = (tuple(c) for c in np.argwhere(mask))
    messages: List[SetPixel] = []
    for y, x in coords:
        channels = pixels[y, x].tolist()
        # uint8 channels and bounds-checked coordinates are already in range
        color = Color.model_construct(
            r=channels[0], g=channels[1], b=channels[2], a=channels[3] if with_alpha else None
        )
        position = Position.model_construct(x=int(x) + offset_x, y=int(y) + offset_y)
        messages.append(SetPixel.model_construct(position=position, color=color))
    return messages


__all__ = ["Frame", "PixelSource", "array_to_messages"]
