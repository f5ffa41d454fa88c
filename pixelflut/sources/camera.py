from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

import cv2
import numpy as np

from pixelflut.protocol import SourceFailure

from .base import Frame, array_to_messages

logger = logging.getLogger(__name__)


class CameraSource:
    """Streams camera frames as full-frame pixel writes (alpha absent)."""

    def __init__(
        self,
        camera_id: int = 0,
        capture: Optional[Any] = None,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> None:
        self.camera_id = camera_id
        self.offset_x = offset_x
        self.offset_y = offset_y
        self._capture = capture if capture is not None else cv2.VideoCapture(camera_id)
        if not self._capture.isOpened():
            raise SourceFailure(f"Unable to open camera {camera_id}")

    def read(self) -> np.ndarray:
        """Read one frame as an ``H x W x 3`` RGB array."""
        ok, frame = self._capture.read()
        if not ok or frame is None:
            logger.warning("Camera %s returned no frame", self.camera_id)
            raise SourceFailure(f"Unable to get camera frame from {self.camera_id}")
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    def capture(self) -> Frame:
        pixels = self.read()
        return Frame(messages=array_to_messages(pixels, offset_x=self.offset_x, offset_y=self.offset_y))

    def frames(self) -> Iterator[Frame]:
        while True:
            yield self.capture()

    def close(self) -> None:
        self._capture.release()


__all__ = ["CameraSource"]
