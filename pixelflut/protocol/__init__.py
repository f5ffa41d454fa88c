"""
Pixelflut protocol package: keywords, value models, the line codec
and the error taxonomy shared by the transport and pixel sources.
"""

from .commands import PIXEL_PREFIX, SIZE_PREFIX, Command
from .constants import DEFAULT_PORT, DEFAULT_SEND_BUFFER_SIZE, ENCODING, LINE_DELIMITER
from .errors import (
    ConnectFailure,
    ErrorCode,
    HexParseFailure,
    MissingData,
    NoResponseExpected,
    ParseFailure,
    PixelflutError,
    ReceiveFailure,
    SendFailure,
    SourceFailure,
)
from .framing import decode_color, decode_msg, decode_two_u32, encode_color, encode_msg, encode_position, write_msg
from .messages import (
    BaseMsg,
    BaseResponse,
    Color,
    GetPixel,
    GetSize,
    Help,
    IncomingResponse,
    OutgoingMessage,
    PixelResponse,
    Position,
    RawResponse,
    SetPixel,
    Size,
    SizeResponse,
)

__all__ = [
    "Command",
    "PIXEL_PREFIX",
    "SIZE_PREFIX",
    "DEFAULT_PORT",
    "DEFAULT_SEND_BUFFER_SIZE",
    "ENCODING",
    "LINE_DELIMITER",
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
    "encode_position",
    "encode_color",
    "encode_msg",
    "write_msg",
    "decode_two_u32",
    "decode_color",
    "decode_msg",
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
    "Position",
    "Color",
    "Size",
]
