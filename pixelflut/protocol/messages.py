from __future__ import annotations

from functools import total_ordering
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .commands import Command
from .constants import U8_MAX, U32_MAX


class ValueModel(BaseModel):
    """Immutable, validated value shared by every protocol entity."""

    model_config = ConfigDict(frozen=True)


@total_ordering
class Position(ValueModel):
    """Canvas coordinate, ordered on x then y."""

    x: int = Field(..., ge=0, le=U32_MAX)
    y: int = Field(..., ge=0, le=U32_MAX)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (self.x, self.y) < (other.x, other.y)


@total_ordering
class Color(ValueModel):
    """
    RGB color with optional alpha.

    A missing alpha means opaque/unspecified and is not sent on the wire.
    Ordering compares r, g, b, then alpha, with a missing alpha sorting
    before any present one.
    """

    r: int = Field(..., ge=0, le=U8_MAX)
    g: int = Field(..., ge=0, le=U8_MAX)
    b: int = Field(..., ge=0, le=U8_MAX)
    a: Optional[int] = Field(default=None, ge=0, le=U8_MAX)

    @property
    def sort_key(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, -1 if self.a is None else self.a)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.sort_key < other.sort_key

    @classmethod
    def black(cls) -> "Color":
        return cls(r=0, g=0, b=0)

    @classmethod
    def white(cls) -> "Color":
        return cls(r=255, g=255, b=255)

    @classmethod
    def red(cls) -> "Color":
        return cls(r=255, g=0, b=0)

    @classmethod
    def green(cls) -> "Color":
        return cls(r=0, g=255, b=0)

    @classmethod
    def blue(cls) -> "Color":
        return cls(r=0, g=0, b=255)


class Size(ValueModel):
    """Canvas dimensions as reported by the server."""

    x: int = Field(..., ge=0, le=U32_MAX)
    y: int = Field(..., ge=0, le=U32_MAX)


class BaseMsg(ValueModel):
    """Base for every client → server command."""

    command: Command

    def expect_response(self) -> bool:
        """Whether the server answers this command with exactly one line."""
        return True


class SetPixel(BaseMsg):
    command: Literal[Command.PIXEL] = Command.PIXEL
    position: Position
    color: Color

    def expect_response(self) -> bool:
        return False


class GetPixel(BaseMsg):
    command: Literal[Command.PIXEL] = Command.PIXEL
    position: Position


class GetSize(BaseMsg):
    command: Literal[Command.SIZE] = Command.SIZE


class Help(BaseMsg):
    command: Literal[Command.HELP] = Command.HELP


OutgoingMessage = Union[SetPixel, GetPixel, GetSize, Help]


class BaseResponse(ValueModel):
    """Base for every decoded server line."""


class PixelResponse(BaseResponse):
    position: Position
    color: Color


class SizeResponse(BaseResponse):
    size: Size


class RawResponse(BaseResponse):
    """Any line without a recognized prefix, kept verbatim."""

    text: str


IncomingResponse = Union[PixelResponse, SizeResponse, RawResponse]


__all__ = [
    "ValueModel",
    "Position",
    "Color",
    "Size",
    "BaseMsg",
    "SetPixel",
    "GetPixel",
    "GetSize",
    "Help",
    "OutgoingMessage",
    "BaseResponse",
    "PixelResponse",
    "SizeResponse",
    "RawResponse",
    "IncomingResponse",
]
