"""Line readers with a bounded wait."""

from __future__ import annotations

import os
import select
import time
from abc import ABC, abstractmethod
from typing import BinaryIO

READ_CHUNK_SIZE = 65536


class LineReader(ABC):
    """
    Reads one newline-terminated line from an inbound stream.

    Implementations differ in how they wait: a live pipe must be polled
    against a deadline, while an in-memory buffer can be read directly.
    """

    @abstractmethod
    def readline(self, timeout: float) -> bytes | None:
        """
        Read the next line, waiting at most ``timeout`` seconds.

        Returns:
            The line including its terminator (the final line of a stream
            may lack one), or None if no line was available in time.

        Raises:
            EOFError: If the underlying stream was closed by the peer.
            OSError: If the read itself fails.
        """
        pass

    @abstractmethod
    def discard_pending(self) -> int:
        """
        Drop input that is already available without waiting for more.

        Returns:
            Number of bytes discarded.
        """
        pass


class FileDescriptorLineReader(LineReader):
    """
    Reader for streams backed by a pollable OS descriptor.

    Reads raw chunks with ``os.read`` into its own buffer, so bytes held in
    the stream object's Python-level buffer are not seen. Pass an unbuffered
    stream or one nothing else has read from.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self._fd = stream.fileno()
        self._buffer = bytearray()
        self._eof = False

    def readline(self, timeout: float) -> bytes | None:
        deadline = time.monotonic() + timeout

        while True:
            newline = self._buffer.find(b"\n")
            if newline >= 0:
                line = bytes(self._buffer[: newline + 1])
                del self._buffer[: newline + 1]
                return line

            if self._eof:
                if self._buffer:
                    line = bytes(self._buffer)
                    self._buffer.clear()
                    return line
                raise EOFError("Inbound stream closed")

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None

            readable, _, _ = select.select([self._fd], [], [], remaining)
            if not readable:
                return None
            self._fill()

    def discard_pending(self) -> int:
        discarded = len(self._buffer)
        self._buffer.clear()

        while not self._eof:
            readable, _, _ = select.select([self._fd], [], [], 0)
            if not readable:
                break
            discarded += self._fill()

        self._buffer.clear()
        return discarded

    def _fill(self) -> int:
        chunk = os.read(self._fd, READ_CHUNK_SIZE)
        if not chunk:
            self._eof = True
        self._buffer += chunk
        return len(chunk)


class BufferLineReader(LineReader):
    """
    Reader for in-memory streams such as ``io.BytesIO``.

    Everything the buffer will ever hold is already present, so there is
    nothing to wait for: an exhausted buffer means no line arrived.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def readline(self, timeout: float) -> bytes | None:
        line = self.stream.readline()
        return line or None

    def discard_pending(self) -> int:
        return len(self.stream.read())


def reader_for(stream: BinaryIO) -> LineReader:
    """
    Pick a reader for ``stream``.

    Streams exposing a real descriptor get a polling reader; anything else
    is read directly.
    """
    try:
        stream.fileno()
    except (AttributeError, OSError, ValueError):
        return BufferLineReader(stream)
    return FileDescriptorLineReader(stream)
