from .frames import Frame, PixelSource
from .network import Address, Client

__all__ = ["Address", "Client", "Frame", "PixelSource"]
