"""MD5 message digest (RFC 1321) with an incremental interface."""

from __future__ import annotations

import math
import struct

_MASK = 0xFFFFFFFF

_SHIFTS = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)

_SINE_TABLE = tuple(int(abs(math.sin(i + 1)) * 2**32) & _MASK for i in range(64))

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def _rotate_left(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & _MASK


class Md5:
    """Incremental MD5 hasher with a hashlib-like interface."""

    digest_size = 16
    block_size = 64
    name = "md5"

    def __init__(self, data: bytes = b"") -> None:
        self._state = list(_INITIAL_STATE)
        self._length = 0
        self._pending = b""
        if data:
            self.update(data)

    def update(self, data) -> None:
        """Append bytes-like ``data`` to the message."""
        chunk = bytes(memoryview(data))
        self._length += len(chunk)
        buffer = self._pending + chunk
        whole = len(buffer) - len(buffer) % self.block_size
        for offset in range(0, whole, self.block_size):
            self._process(buffer[offset:offset + self.block_size])
        self._pending = buffer[whole:]

    def _process(self, block: bytes) -> None:
        words = struct.unpack("<16I", block)
        a, b, c, d = self._state
        for step, (shift, constant) in enumerate(zip(_SHIFTS, _SINE_TABLE)):
            if step < 16:
                mixed = (b & c) | (~b & d)
                index = step
            elif step < 32:
                mixed = (d & b) | (~d & c)
                index = (5 * step + 1) % 16
            elif step < 48:
                mixed = b ^ c ^ d
                index = (3 * step + 5) % 16
            else:
                mixed = c ^ (b | ~d)
                index = (7 * step) % 16
            total = (a + mixed + words[index] + constant) & _MASK
            a, d, c, b = d, c, b, (b + _rotate_left(total, shift)) & _MASK
        self._state = [
            (old + new) & _MASK for old, new in zip(self._state, (a, b, c, d))
        ]

    def copy(self) -> "Md5":
        """Return an independent hasher with the same state."""
        clone = Md5()
        clone._state = list(self._state)
        clone._length = self._length
        clone._pending = self._pending
        return clone

    def digest(self) -> bytes:
        """Return the 16-byte digest of the data so far; the hasher stays usable."""
        final = self.copy()
        bit_length = (self._length * 8) & 0xFFFFFFFFFFFFFFFF
        padding_length = (55 - self._length) % 64 + 1
        final.update(b"\x80" + b"\x00" * (padding_length - 1))
        final.update(struct.pack("<Q", bit_length))
        return struct.pack("<4I", *final._state)

    def hexdigest(self) -> str:
        """Return the digest as lower-case hexadecimal text."""
        return self.digest().hex()


def md5_hex(data) -> str:
    """Hex MD5 of ``data``; text is encoded as UTF-8 first."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return Md5(data).hexdigest()