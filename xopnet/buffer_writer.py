"""Outgoing packet queue and big/little-endian integer writers."""

from __future__ import annotations

import socket
from collections import deque
from dataclasses import dataclass


def write_uint32_be(value: int) -> bytes:
    """Pack the low 32 bits of ``value`` big-endian."""
    return (value & 0xFFFFFFFF).to_bytes(4, "big")


def write_uint32_le(value: int) -> bytes:
    """Pack the low 32 bits of ``value`` little-endian."""
    return (value & 0xFFFFFFFF).to_bytes(4, "little")


def write_uint24_be(value: int) -> bytes:
    """Pack the low 24 bits of ``value`` big-endian."""
    return (value & 0xFFFFFF).to_bytes(3, "big")


def write_uint24_le(value: int) -> bytes:
    """Pack the low 24 bits of ``value`` little-endian."""
    return (value & 0xFFFFFF).to_bytes(3, "little")


def write_uint16_be(value: int) -> bytes:
    """Pack the low 16 bits of ``value`` big-endian."""
    return (value & 0xFFFF).to_bytes(2, "big")


def write_uint16_le(value: int) -> bytes:
    """Pack the low 16 bits of ``value`` little-endian."""
    return (value & 0xFFFF).to_bytes(2, "little")


@dataclass
class _Packet:
    data: bytes
    offset: int

    @property
    def remaining(self) -> memoryview:
        return memoryview(self.data)[self.offset:]

    @property
    def done(self) -> bool:
        return self.offset >= len(self.data)


class BufferWriter:
    """Bounded queue of packets waiting to be written to a socket."""

    MAX_QUEUE_LENGTH = 10000

    def __init__(self, capacity: int = MAX_QUEUE_LENGTH) -> None:
        self._capacity = capacity
        self._packets: deque[_Packet] = deque()

    def append(self, data, index: int = 0) -> bool:
        """Queue ``data`` to be sent starting at ``index``.

        Returns False when nothing would be sent or the queue is full.
        """
        payload = bytes(data)
        if len(payload) <= index:
            return False
        if len(self._packets) >= self._capacity:
            return False
        self._packets.append(_Packet(payload, max(index, 0)))
        return True

    def send(self, sock: socket.socket, timeout: int = 0) -> int:
        """Write queued packets to ``sock`` until one is only partly sent.

        ``timeout`` (milliseconds), when positive, makes the writes blocking
        with that send timeout; the socket is put back into non-blocking mode
        afterwards. Returns the byte count of the last write, 0 when the
        queue is empty or the socket would block. Other socket errors are
        raised.
        """
        if timeout > 0:
            sock.settimeout(timeout / 1000)
        try:
            return self._drain(sock)
        finally:
            if timeout > 0:
                sock.setblocking(False)

    def _drain(self, sock: socket.socket) -> int:
        sent = 0
        while self._packets:
            packet = self._packets[0]
            try:
                sent = sock.send(packet.remaining)
            except (BlockingIOError, InterruptedError, TimeoutError):
                return 0
            if sent <= 0:
                return sent
            packet.offset += sent
            if not packet.done:
                return sent
            self._packets.popleft()
        return sent if sent > 0 else 0

    def is_empty(self) -> bool:
        """True when no packet is waiting."""
        return not self._packets

    def is_full(self) -> bool:
        """True when the queue holds as many packets as its capacity."""
        return len(self._packets) >= self._capacity

    def __len__(self) -> int:
        return len(self._packets)