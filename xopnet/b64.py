"""Streaming Base64 encoder and decoder.

The encoder breaks its output into lines of 72 characters and ends the
encoded text with a newline. The decoder skips every character that is not
part of the Base64 alphabet, including whitespace and ``=`` padding.
"""

from __future__ import annotations

from enum import IntEnum
from typing import BinaryIO

CHARS_PER_LINE = 72
BUFFER_SIZE = 4096

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

# Indexed by (character code - 43); -1 marks an invalid character and -2 the
# padding character '='.
_DECODING = (
    62, -1, -1, -1, 63, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, -1, -1, -1,
    -2, -1, -1, -1, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16,
    17, 18, 19, 20, 21, 22, 23, 24, 25, -1, -1, -1, -1, -1, -1, 26, 27, 28,
    29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40, 41, 42, 43, 44, 45, 46,
    47, 48, 49, 50, 51,
)
_DECODING_OFFSET = 43


class _EncodeStep(IntEnum):
    A = 0
    B = 1
    C = 2


class _DecodeStep(IntEnum):
    A = 0
    B = 1
    C = 2
    D = 3


def encode_value(value: int) -> str:
    """Return the Base64 character for a 6-bit value; values above 63 give '='."""
    if value < 0:
        raise ValueError("value must not be negative")
    if value > 63:
        return "="
    return _ALPHABET[value]


def decode_value(char: str | int) -> int:
    """Return the 6-bit value of a Base64 character.

    The result is -2 for the padding character '=' and -1 for any character
    outside the alphabet.
    """
    if isinstance(char, str):
        if len(char) != 1:
            raise ValueError("expected a single character")
        code = ord(char)
    else:
        code = int(char)
        if not 0 <= code <= 0xFF:
            raise ValueError("byte value out of range")
    if code > 0x7F:
        return -1
    index = code - _DECODING_OFFSET
    if index < 0 or index >= len(_DECODING):
        return -1
    return _DECODING[index]


class Base64Encoder:
    """Incremental Base64 encoder that carries partial groups between calls."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._step = _EncodeStep.A
        self._result = 0
        self._step_count = 0

    def encode(self, data) -> str:
        """Encode ``data`` and return the text produced so far."""
        out: list[str] = []
        step = self._step
        result = self._result
        for byte in bytes(data):
            if step is _EncodeStep.A:
                out.append(encode_value(byte >> 2))
                result = (byte & 0x03) << 4
                step = _EncodeStep.B
            elif step is _EncodeStep.B:
                result |= byte >> 4
                out.append(encode_value(result))
                result = (byte & 0x0F) << 2
                step = _EncodeStep.C
            else:
                result |= byte >> 6
                out.append(encode_value(result))
                out.append(encode_value(byte & 0x3F))
                step = _EncodeStep.A
                self._step_count += 1
                if self._step_count == CHARS_PER_LINE // 4:
                    out.append("\n")
                    self._step_count = 0
        self._step = step
        self._result = result
        return "".join(out)

    def finish(self) -> str:
        """Flush the pending group with padding and a final newline, then reset."""
        if self._step is _EncodeStep.B:
            tail = encode_value(self._result) + "=="
        elif self._step is _EncodeStep.C:
            tail = encode_value(self._result) + "="
        else:
            tail = ""
        self._reset()
        return tail + "\n"


class Base64Decoder:
    """Incremental Base64 decoder that carries partial bytes between calls."""

    def __init__(self) -> None:
        self._step = _DecodeStep.A
        self._partial = 0

    def decode(self, text: str | bytes) -> bytes:
        """Decode ``text`` and return the complete bytes produced so far."""
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        out = bytearray()
        step = self._step
        partial = self._partial
        for code in raw:
            fragment = decode_value(code)
            if fragment < 0:
                continue
            if step is _DecodeStep.A:
                partial = (fragment & 0x3F) << 2
                step = _DecodeStep.B
            elif step is _DecodeStep.B:
                out.append(partial | ((fragment & 0x30) >> 4))
                partial = (fragment & 0x0F) << 4
                step = _DecodeStep.C
            elif step is _DecodeStep.C:
                out.append(partial | ((fragment & 0x3C) >> 2))
                partial = (fragment & 0x03) << 6
                step = _DecodeStep.D
            else:
                out.append(partial | (fragment & 0x3F))
                step = _DecodeStep.A
        self._step = step
        self._partial = partial
        return bytes(out)


def encode(data) -> str:
    """Encode ``data`` completely, including line breaks and the final newline."""
    encoder = Base64Encoder()
    return encoder.encode(data) + encoder.finish()


def decode(text: str | bytes) -> bytes:
    """Decode Base64 ``text``, ignoring characters outside the alphabet."""
    return Base64Decoder().decode(text)


def encode_stream(source: BinaryIO, target: BinaryIO, buffer_size: int = BUFFER_SIZE) -> int:
    """Encode a binary stream into another; return the number of bytes written."""
    if buffer_size <= 0:
        raise ValueError("buffer_size must be positive")
    encoder = Base64Encoder()
    written = 0
    while chunk := source.read(buffer_size):
        encoded = encoder.encode(chunk).encode("ascii")
        target.write(encoded)
        written += len(encoded)
    tail = encoder.finish().encode("ascii")
    target.write(tail)
    return written + len(tail)


def decode_stream(source: BinaryIO, target: BinaryIO, buffer_size: int = BUFFER_SIZE) -> int:
    """Decode a Base64 stream into a binary stream; return the bytes written."""
    if buffer_size <= 0:
        raise ValueError("buffer_size must be positive")
    decoder = Base64Decoder()
    written = 0
    while chunk := source.read(buffer_size):
        plain = decoder.decode(chunk)
        target.write(plain)
        written += len(plain)
    return written