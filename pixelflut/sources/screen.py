from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, Iterator, Optional

import mss
import numpy as np
from mss.exception import ScreenShotError

from pixelflut.protocol import SourceFailure

from .base import Frame, array_to_messages

logger = logging.getLogger(__name__)


class CaptureMode(StrEnum):
    ALL = "all"
    DIFF = "diff"


class ScreenCaptureSource:
    """
    Streams a monitor as pixel writes.

    In ``DIFF`` mode only pixels that changed since the previous capture are
    emitted; the first capture always sends the whole screen. ``grabber``
    defaults to an ``mss.mss()`` instance and only needs ``monitors`` and
    ``grab(monitor)``.
    """

    def __init__(
        self,
        monitor: int = 1,
        mode: CaptureMode = CaptureMode.DIFF,
        grabber: Optional[Any] = None,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> None:
        self.mode = CaptureMode(mode)
        self.offset_x = offset_x
        self.offset_y = offset_y
        try:
            self._grabber = grabber if grabber is not None else mss.mss()
        except ScreenShotError as exc:
            raise SourceFailure(f"Unable to create screen capturer: {exc}") from exc
        try:
            self._monitor = self._grabber.monitors[monitor]
        except IndexError as exc:
            raise SourceFailure(f"Unknown monitor {monitor}") from exc
        self._previous: Optional[np.ndarray] = None

    def grab(self) -> np.ndarray:
        """Capture the monitor as an ``H x W x 3`` RGB array."""
        try:
            shot = self._grabber.grab(self._monitor)
        except ScreenShotError as exc:
            raise SourceFailure(f"Unable to capture screen: {exc}") from exc
        return np.frombuffer(shot.rgb, dtype=np.uint8).reshape(shot.height, shot.width, 3)

    def capture(self) -> Frame:
        current = self.grab()
        mask = None
        if self.mode is CaptureMode.DIFF and self._previous is not None:
            if self._previous.shape != current.shape:
                logger.warning("Screen geometry changed, sending full frame")
            else:
                mask = np.any(current != self._previous, axis=2)
        self._previous = current
        messages = array_to_messages(current, mask=mask, offset_x=self.offset_x, offset_y=self.offset_y)
        logger.debug("Screen capture produced %s pixel(s)", len(messages))
        return Frame(messages=messages)

    def frames(self) -> Iterator[Frame]:
        while True:
            yield self.capture()


__all__ = ["CaptureMode", "ScreenCaptureSource"]
