"""Non-blocking self-pipe used to wake an event loop."""

from __future__ import annotations

import errno
import os
import socket
import sys


class Pipe:
    """A one-way non-blocking channel with a read end and a write end.

    On Linux it is an OS pipe; elsewhere a connected socket pair, so that
    select-based loops can wait on it.
    """

    def __init__(self) -> None:
        self._read: int | socket.socket | None = None
        self._write: int | socket.socket | None = None

    def __enter__(self) -> "Pipe":
        if self._read is None:
            self.create()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def create(self) -> None:
        """Open both ends, closing any previously opened ones."""
        self.close()
        if sys.platform.startswith("linux"):
            read_fd, write_fd = os.pipe()
            os.set_blocking(read_fd, False)
            os.set_blocking(write_fd, False)
            self._read, self._write = read_fd, write_fd
        else:
            read_sock, write_sock = socket.socketpair()
            read_sock.setblocking(False)
            write_sock.setblocking(False)
            self._read, self._write = read_sock, write_sock

    @staticmethod
    def _require(end):
        if end is None:
            raise OSError(errno.EBADF, "pipe is not open")
        return end

    def write(self, data) -> int:
        """Write ``data``; return the bytes written, 0 when the pipe is full."""
        end = self._require(self._write)
        try:
            if isinstance(end, socket.socket):
                return end.send(data)
            return os.write(end, data)
        except BlockingIOError:
            return 0

    def read(self, size: int = 1024) -> bytes:
        """Read up to ``size`` bytes; empty bytes when nothing is waiting."""
        end = self._require(self._read)
        try:
            if isinstance(end, socket.socket):
                return end.recv(size)
            return os.read(end, size)
        except BlockingIOError:
            return b""

    def close(self) -> None:
        """Close both ends; closing twice is harmless."""
        for end in (self._read, self._write):
            if isinstance(end, socket.socket):
                end.close()
            elif end is not None:
                os.close(end)
        self._read = None
        self._write = None

    @staticmethod
    def _fileno(end) -> int:
        return end.fileno() if isinstance(end, socket.socket) else end

    def read_end(self) -> int:
        """Descriptor to wait on for readability."""
        return self._fileno(self._require(self._read))

    def write_end(self) -> int:
        """Descriptor that data is written to."""
        return self._fileno(self._require(self._write))