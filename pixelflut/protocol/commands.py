from __future__ import annotations

from enum import StrEnum


class Command(StrEnum):
    """
    Case-sensitive keywords of the pixelflut grammar.
    The same keyword opens a request and its reply (``PX``, ``SIZE``).
    """

    PIXEL = "PX"
    SIZE = "SIZE"
    HELP = "HELP"


# Reply prefixes include the separating space; a bare keyword is not a structured reply.
PIXEL_PREFIX = f"{Command.PIXEL.value} "
SIZE_PREFIX = f"{Command.SIZE.value} "

__all__ = ["Command", "PIXEL_PREFIX", "SIZE_PREFIX"]
