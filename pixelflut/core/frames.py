from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterator, Protocol, Sequence

from pixelflut.protocol import SetPixel, write_msg


@dataclass(frozen=True)
class Frame:
    """One unit of work from a pixel source plus the pause to keep after it."""

    messages: Sequence[SetPixel]
    delay: float = 0.0  # seconds

    def __len__(self) -> int:
        return len(self.messages)

    def encode(self, sink: BinaryIO) -> None:
        for msg in self.messages:
            write_msg(sink, msg)


class PixelSource(Protocol):
    """Anything producing ordered frames of pixel writes."""

    def frames(self) -> Iterator[Frame]:
        ...


__all__ = ["Frame", "PixelSource"]
