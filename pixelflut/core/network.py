from __future__ import annotations

import logging
import socket
import time
from typing import Any, BinaryIO, Callable, Iterable, List, Optional, Tuple, Union

from pixelflut.protocol import (
    DEFAULT_SEND_BUFFER_SIZE,
    ENCODING,
    ConnectFailure,
    GetPixel,
    GetSize,
    IncomingResponse,
    MissingData,
    NoResponseExpected,
    OutgoingMessage,
    ParseFailure,
    PixelResponse,
    Position,
    ReceiveFailure,
    SendFailure,
    Size,
    SizeResponse,
    decode_msg,
    write_msg,
)
from pixelflut.core.frames import Frame, PixelSource

logger = logging.getLogger(__name__)

Address = Union[Tuple[str, int], str]


class Client:
    """
    Blocking pixelflut client over one TCP connection.

    The socket is owned by the client and exposed through two views: a
    buffered writer for commands and a line reader for replies. Replies carry
    no identifiers, so they are matched to requests purely by order; every
    response-expecting command must be answered by exactly one line.
    """

    def __init__(self, sock: socket.socket, send_buffer_size: int = DEFAULT_SEND_BUFFER_SIZE) -> None:
        self._sock = sock
        self._writer: BinaryIO = sock.makefile("wb", buffering=send_buffer_size)
        self._reader: BinaryIO = sock.makefile("rb")
        self.sent_messages = 0
        self.received_responses = 0

    @classmethod
    def connect(
        cls,
        address: Address,
        timeout: Optional[float] = None,
        send_buffer_size: int = DEFAULT_SEND_BUFFER_SIZE,
    ) -> "Client":
        """Open a connection to ``(host, port)`` or ``"host:port"``."""
        host, port = _split_address(address)
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except (OSError, ValueError) as exc:
            raise ConnectFailure(f"Unable to connect to {host}:{port}: {exc}") from exc
        # the timeout only guards connection setup, reads and flushes block
        sock.settimeout(None)
        logger.info("Connected to %s:%s", host, port)
        return cls(sock, send_buffer_size=send_buffer_size)

    @property
    def sink(self) -> BinaryIO:
        """Outbound buffer; bytes written here go out on the next flush."""
        return self._writer

    def send_buffered(self, msg: OutgoingMessage) -> None:
        """Encode into the outbound buffer without flushing."""
        try:
            write_msg(self._writer, msg)
        except OSError as exc:
            raise SendFailure(f"Unable to send command: {exc}") from exc
        self.sent_messages += 1

    def flush(self) -> None:
        try:
            self._writer.flush()
        except OSError as exc:
            raise SendFailure(f"Unable to flush commands: {exc}") from exc

    def send(self, msg: OutgoingMessage) -> None:
        """Send and flush."""
        self.send_buffered(msg)
        self.flush()

    def send_recv(self, msg: OutgoingMessage) -> IncomingResponse:
        """Send and read the reply; commands without a reply are rejected before any write."""
        if not msg.expect_response():
            raise NoResponseExpected(f"{type(msg).__name__} expects no response, use send()")
        self.send(msg)
        return self.recv()

    def send_all(self, msgs: Iterable[OutgoingMessage]) -> List[IncomingResponse]:
        """
        Buffer every message, flush once, then read one reply per
        response-expecting message, in input order.
        """
        buffered = expected = 0
        for msg in msgs:
            if msg.expect_response():
                expected += 1
            self.send_buffered(msg)
            buffered += 1
        self.flush()
        logger.debug("Flushed %s message(s), awaiting %s response(s)", buffered, expected)
        return [self.recv() for _ in range(expected)]

    def recv(self) -> IncomingResponse:
        """Block for exactly one reply line and decode it."""
        try:
            raw = self._reader.readline()
        except OSError as exc:
            raise ReceiveFailure(f"Receiver failed: {exc}") from exc
        if not raw:
            raise MissingData("Connection closed before a response arrived")
        try:
            line = raw.decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise ReceiveFailure(f"Response is not valid text: {exc}") from exc
        line = line.removesuffix("\n").removesuffix("\r")
        self.received_responses += 1
        return decode_msg(line)

    def get_size(self) -> Size:
        response = self.send_recv(GetSize())
        if not isinstance(response, SizeResponse):
            raise ParseFailure(f"Expected a size reply, got {response!r}")
        return response.size

    def get_pixel(self, position: Position) -> PixelResponse:
        response = self.send_recv(GetPixel(position=position))
        if not isinstance(response, PixelResponse):
            raise ParseFailure(f"Expected a pixel reply, got {response!r}")
        return response

    def send_frame(self, frame: Frame) -> None:
        """Encode a whole frame into the outbound buffer and flush it."""
        try:
            frame.encode(self._writer)
        except OSError as exc:
            raise SendFailure(f"Unable to send frame: {exc}") from exc
        self.sent_messages += len(frame)
        self.flush()

    def stream(
        self,
        source: PixelSource,
        frame_limit: Optional[int] = None,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> int:
        """Send frames from ``source``, pausing for each frame's delay. Returns frames sent."""
        sent = 0
        if frame_limit is not None and frame_limit <= 0:
            return sent
        for frame in source.frames():
            self.send_frame(frame)
            sent += 1
            if frame.delay > 0:
                sleep(frame.delay)
            if frame_limit is not None and sent >= frame_limit:
                break
        logger.debug("Streamed %s frame(s)", sent)
        return sent

    def close(self) -> None:
        try:
            self._writer.close()
        except OSError as exc:
            raise SendFailure(f"Unable to flush on close: {exc}") from exc
        finally:
            self._reader.close()
            self._sock.close()
            logger.info("Pixelflut client closed")

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _split_address(address: Address) -> Tuple[str, int]:
    if isinstance(address, tuple):
        host, port = address
    else:
        host, sep, port = address.rpartition(":")
        if not sep or not host:
            raise ConnectFailure(f"Address {address!r} is not host:port")
    try:
        return host.strip("[]"), int(port)
    except (TypeError, ValueError) as exc:
        raise ConnectFailure(f"Invalid port in address {address!r}") from exc


__all__ = ["Address", "Client"]
