"""Growable receive buffer and big/little-endian integer readers."""

from __future__ import annotations

import socket

_CRLF = b"\r\n"
_CRLF_CRLF = b"\r\n\r\n"


def _read_uint(data, offset: int, width: int, byteorder: str) -> int:
    if offset < 0:
        raise ValueError("offset must not be negative")
    chunk = bytes(data[offset:offset + width])
    if len(chunk) != width:
        raise ValueError(f"need {width} bytes at offset {offset}")
    return int.from_bytes(chunk, byteorder)


def read_uint32_be(data, offset: int = 0) -> int:
    """Read an unsigned 32-bit big-endian integer."""
    return _read_uint(data, offset, 4, "big")


def read_uint32_le(data, offset: int = 0) -> int:
    """Read an unsigned 32-bit little-endian integer."""
    return _read_uint(data, offset, 4, "little")


def read_uint24_be(data, offset: int = 0) -> int:
    """Read an unsigned 24-bit big-endian integer."""
    return _read_uint(data, offset, 3, "big")


def read_uint24_le(data, offset: int = 0) -> int:
    """Read an unsigned 24-bit little-endian integer."""
    return _read_uint(data, offset, 3, "little")


def read_uint16_be(data, offset: int = 0) -> int:
    """Read an unsigned 16-bit big-endian integer."""
    return _read_uint(data, offset, 2, "big")


def read_uint16_le(data, offset: int = 0) -> int:
    """Read an unsigned 16-bit little-endian integer."""
    return _read_uint(data, offset, 2, "little")


class BufferReader:
    """Receive buffer with a read cursor and a write cursor.

    Offsets returned by the ``find_*`` methods are relative to the start of
    the readable data.
    """

    INITIAL_SIZE = 2048
    MAX_BYTES_PER_READ = 4096
    MAX_BUFFER_SIZE = 1024 * 100000

    def __init__(self, initial_size: int = INITIAL_SIZE) -> None:
        if initial_size < 0:
            raise ValueError("initial_size must not be negative")
        self._buffer = bytearray(initial_size)
        self._reader = 0
        self._writer = 0

    def readable_bytes(self) -> int:
        """Number of bytes waiting to be consumed."""
        return self._writer - self._reader

    def writable_bytes(self) -> int:
        """Free space after the write cursor."""
        return len(self._buffer) - self._writer

    def peek(self) -> bytes:
        """Return the readable bytes without consuming them."""
        return bytes(self._buffer[self._reader:self._writer])

    def size(self) -> int:
        """Current capacity of the buffer."""
        return len(self._buffer)

    def feed(self, data) -> None:
        """Append ``data`` after the write cursor, growing the buffer as needed."""
        chunk = bytes(data)
        shortfall = len(chunk) - self.writable_bytes()
        if shortfall > 0:
            self._buffer.extend(bytes(shortfall))
        self._buffer[self._writer:self._writer + len(chunk)] = chunk
        self._writer += len(chunk)

    def _relative(self, position: int) -> int | None:
        return None if position < 0 else position - self._reader

    def find_first_crlf(self) -> int | None:
        """Offset of the first CRLF in the readable data, or None."""
        return self._relative(self._buffer.find(_CRLF, self._reader, self._writer))

    def find_last_crlf(self) -> int | None:
        """Offset of the last CRLF in the readable data, or None."""
        return self._relative(self._buffer.rfind(_CRLF, self._reader, self._writer))

    def find_last_crlf_crlf(self) -> int | None:
        """Offset of the last blank-line marker CRLFCRLF, or None."""
        return self._relative(self._buffer.rfind(_CRLF_CRLF, self._reader, self._writer))

    def retrieve_all(self) -> None:
        """Discard all readable data."""
        self._reader = 0
        self._writer = 0

    def retrieve(self, length: int) -> None:
        """Consume ``length`` bytes; asking for more than is readable clears all."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length <= self.readable_bytes():
            self._reader += length
            if self._reader == self._writer:
                self.retrieve_all()
        else:
            self.retrieve_all()

    def retrieve_until(self, end: int) -> None:
        """Consume bytes up to the offset ``end`` of the readable data."""
        self.retrieve(end)

    def read_from(self, sock: socket.socket) -> int:
        """Receive up to 4096 bytes from ``sock`` into the buffer.

        Returns the number of bytes received, 0 when the peer has closed the
        connection or the buffer has reached its size limit. Socket errors
        are raised.
        """
        if self.writable_bytes() < self.MAX_BYTES_PER_READ:
            if len(self._buffer) > self.MAX_BUFFER_SIZE:
                return 0
            self._buffer.extend(bytes(self.MAX_BYTES_PER_READ))
        start = self._writer
        with memoryview(self._buffer) as view, \
                view[start:start + self.MAX_BYTES_PER_READ] as window:
            received = sock.recv_into(window, self.MAX_BYTES_PER_READ)
        if received > 0:
            self._writer += received
        return received

    def read_all(self) -> bytes:
        """Consume and return all readable data."""
        data = self.peek()
        if data:
            self.retrieve_all()
        return data

    def read_until_crlf(self) -> bytes:
        """Consume and return everything up to and including the last CRLF.

        Returns empty bytes, consuming nothing, when there is no CRLF.
        """
        crlf = self.find_last_crlf()
        if crlf is None:
            return b""
        size = crlf + 2
        data = bytes(self._buffer[self._reader:self._reader + size])
        self.retrieve(size)
        return data