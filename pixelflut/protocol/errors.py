from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Failure kinds surfaced by the codec, the transport and pixel sources."""

    CONNECT_FAILURE = 1001
    SEND_FAILURE = 1002
    RECEIVE_FAILURE = 1003
    MISSING_DATA = 1004
    PARSE_FAILURE = 1005
    HEX_PARSE_FAILURE = 1006
    NO_RESPONSE_EXPECTED = 1007
    SOURCE_FAILURE = 1008


class PixelflutError(Exception):
    """Structured client exception carrying an error code + message."""

    code: ErrorCode = ErrorCode.PARSE_FAILURE
    default_message: str = ""

    def __init__(self, message: str = "", code: Optional[ErrorCode] = None) -> None:
        if code is not None:
            self.code = code
        self.message = message or self.default_message
        super().__init__(f"{self.code.name} ({int(self.code)}): {self.message}")


class ConnectFailure(PixelflutError):
    code = ErrorCode.CONNECT_FAILURE
    default_message = "Unable to connect"


class SendFailure(PixelflutError):
    code = ErrorCode.SEND_FAILURE
    default_message = "Unable to send command"


class ReceiveFailure(PixelflutError):
    code = ErrorCode.RECEIVE_FAILURE
    default_message = "Receiver failed"


class MissingData(PixelflutError):
    """Token stream ended early, or the peer closed before a reply arrived."""

    code = ErrorCode.MISSING_DATA
    default_message = "Missing data in response"


class ParseFailure(PixelflutError):
    code = ErrorCode.PARSE_FAILURE
    default_message = "Unable to parse response"


class HexParseFailure(ParseFailure):
    code = ErrorCode.HEX_PARSE_FAILURE
    default_message = "Unable to decode rgba color"


class NoResponseExpected(PixelflutError):
    code = ErrorCode.NO_RESPONSE_EXPECTED
    default_message = "The message expects no response, use send()"


class SourceFailure(PixelflutError):
    code = ErrorCode.SOURCE_FAILURE
    default_message = "Pixel source failed to produce a frame"


__all__ = [
    "ErrorCode",
    "PixelflutError",
    "ConnectFailure",
    "SendFailure",
    "ReceiveFailure",
    "MissingData",
    "ParseFailure",
    "HexParseFailure",
    "NoResponseExpected",
    "SourceFailure",
]
