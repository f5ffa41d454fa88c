from __future__ import annotations

import re
from typing import BinaryIO, Callable, Tuple, Union

from .commands import PIXEL_PREFIX, SIZE_PREFIX, Command
from .constants import COLOR_ALPHA_HEX_LEN, COLOR_HEX_LEN, ENCODING, LINE_DELIMITER, U32_MAX
from .errors import HexParseFailure, MissingData, ParseFailure
from .messages import (
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

# ASCII whitespace only; str.split() would also break on unicode spaces.
_ASCII_WS = " \t\n\r\f\v"
_TOKEN_RE = re.compile(r"[^ \t\n\r\f\v]+")
_DECIMAL_RE = re.compile(r"\+?[0-9]+")
_HEX_PAIR_RE = re.compile(r"[0-9a-fA-F]{2}")

ResponseDecoder = Callable[[str], IncomingResponse]


def encode_position(position: Position) -> str:
    return f"{position.x} {position.y}"


def encode_color(color: Color) -> str:
    """Two lowercase hex digits per channel, alpha only when present."""
    if color.a is None:
        return f"{color.r:02x}{color.g:02x}{color.b:02x}"
    return f"{color.r:02x}{color.g:02x}{color.b:02x}{color.a:02x}"


def encode_msg(msg: OutgoingMessage) -> bytes:
    """Encode a command into one newline-terminated protocol line."""
    if isinstance(msg, SetPixel):
        line = f"{Command.PIXEL.value} {encode_position(msg.position)} {encode_color(msg.color)}"
    elif isinstance(msg, GetPixel):
        line = f"{Command.PIXEL.value} {encode_position(msg.position)}"
    elif isinstance(msg, GetSize):
        line = Command.SIZE.value
    elif isinstance(msg, Help):
        line = Command.HELP.value
    else:
        raise TypeError(f"Cannot encode {type(msg).__name__}")
    return line.encode(ENCODING) + LINE_DELIMITER


def write_msg(sink: BinaryIO, msg: OutgoingMessage) -> None:
    """Encode ``msg`` straight into a binary sink (socket writer, BytesIO, ...)."""
    sink.write(encode_msg(msg))


def _parse_u32(token: str) -> int:
    if not _DECIMAL_RE.fullmatch(token):
        raise ParseFailure(f"Invalid decimal token {token!r}")
    value = int(token)
    if value > U32_MAX:
        raise ParseFailure(f"Decimal token {token!r} out of u32 range")
    return value


def decode_two_u32(text: str) -> Tuple[str, Tuple[int, int]]:
    """
    Parse two whitespace separated u32 tokens.

    Returns the text left after the second token together with the pair.
    """
    tokens = _TOKEN_RE.finditer(text)
    first = next(tokens, None)
    second = next(tokens, None)
    if first is None or second is None:
        raise MissingData(f"Expected two decimal values in {text!r}")
    x = _parse_u32(first.group())
    y = _parse_u32(second.group())
    return text[second.end():], (x, y)


def _parse_hex_pair(pair: str) -> int:
    if not _HEX_PAIR_RE.fullmatch(pair):
        raise HexParseFailure(f"Invalid hex byte {pair!r}")
    return int(pair, 16)


def decode_color(text: str) -> Tuple[str, Color]:
    """
    Parse ``rrggbb`` or ``rrggbbaa`` from the start of ``text``.

    Eight characters are consumed whenever at least eight remain, whatever
    they are; a trailing token glued to a 6 digit color is read as alpha.
    """
    if len(text) < COLOR_HEX_LEN:
        raise MissingData(f"Color needs {COLOR_HEX_LEN} hex digits, got {text!r}")
    r = _parse_hex_pair(text[0:2])
    g = _parse_hex_pair(text[2:4])
    b = _parse_hex_pair(text[4:6])
    if len(text) >= COLOR_ALPHA_HEX_LEN:
        a = _parse_hex_pair(text[6:8])
        return text[COLOR_ALPHA_HEX_LEN:], Color(r=r, g=g, b=b, a=a)
    return text[COLOR_HEX_LEN:], Color(r=r, g=g, b=b)


def _decode_pixel(text: str) -> PixelResponse:
    text, (x, y) = decode_two_u32(text)
    _, color = decode_color(text.lstrip(_ASCII_WS))
    return PixelResponse(position=Position(x=x, y=y), color=color)


def _decode_size(text: str) -> SizeResponse:
    _, (x, y) = decode_two_u32(text)
    return SizeResponse(size=Size(x=x, y=y))


# Tried in order; the first matching prefix wins, everything else is raw text.
RESPONSE_DECODERS: Tuple[Tuple[str, ResponseDecoder], ...] = (
    (PIXEL_PREFIX, _decode_pixel),
    (SIZE_PREFIX, _decode_size),
)


def decode_msg(data: Union[str, bytes]) -> IncomingResponse:
    """Decode one server line into a response value."""
    if isinstance(data, bytes):
        try:
            line = data.decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise ParseFailure(f"Decode failed: {exc}") from exc
    else:
        line = data
    for prefix, decoder in RESPONSE_DECODERS:
        if line.startswith(prefix):
            return decoder(line[len(prefix):])
    return RawResponse(text=line)


__all__ = [
    "encode_position",
    "encode_color",
    "encode_msg",
    "write_msg",
    "decode_two_u32",
    "decode_color",
    "decode_msg",
    "RESPONSE_DECODERS",
]
