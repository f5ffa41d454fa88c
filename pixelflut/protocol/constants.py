"""Protocol-wide constants for the pixelflut line protocol."""

ENCODING = "utf-8"
LINE_DELIMITER = b"\n"
DEFAULT_PORT = 1234
DEFAULT_SEND_BUFFER_SIZE = 64 * 1024  # bytes held before an implicit spill
U8_MAX = 0xFF
U32_MAX = 0xFFFFFFFF
COLOR_HEX_LEN = 6
COLOR_ALPHA_HEX_LEN = 8

__all__ = [
    "ENCODING",
    "LINE_DELIMITER",
    "DEFAULT_PORT",
    "DEFAULT_SEND_BUFFER_SIZE",
    "U8_MAX",
    "U32_MAX",
    "COLOR_HEX_LEN",
    "COLOR_ALPHA_HEX_LEN",
]
