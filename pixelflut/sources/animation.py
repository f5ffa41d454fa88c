"""Animated image (GIF) source decoded up front with Pillow."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Union

import numpy as np
from PIL import Image, ImageSequence

from pixelflut.protocol import SourceFailure

from .base import Frame, array_to_messages

logger = logging.getLogger(__name__)

DEFAULT_FRAME_DURATION_MS = 100


class AnimationSource:
    """Replays every frame of an animated image once, honouring frame durations."""

    def __init__(self, frames: List[Frame]) -> None:
        self._frames = frames

    @classmethod
    def load(cls, path: Union[str, Path], offset_x: int = 0, offset_y: int = 0) -> "AnimationSource":
        try:
            with Image.open(path) as img:
                frames = [
                    _to_frame(frame, offset_x, offset_y) for frame in ImageSequence.Iterator(img)
                ]
        except OSError as exc:
            raise SourceFailure(f"Unable to decode image {path}: {exc}") from exc
        logger.info("Loaded %s frame(s) from %s", len(frames), path)
        return cls(frames)

    def __len__(self) -> int:
        return len(self._frames)

    def frames(self) -> Iterator[Frame]:
        return iter(self._frames)


def _to_frame(frame: Image.Image, offset_x: int, offset_y: int) -> Frame:
    duration = frame.info.get("duration") or DEFAULT_FRAME_DURATION_MS
    pixels = np.asarray(frame.convert("RGBA"))
    return Frame(
        messages=array_to_messages(pixels, offset_x=offset_x, offset_y=offset_y),
        delay=duration / 1000.0,
    )


__all__ = ["AnimationSource", "DEFAULT_FRAME_DURATION_MS"]
