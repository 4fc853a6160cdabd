"""H.264 parameter-set extraction and data volume formatting."""

from __future__ import annotations

NAL_SPS = 7
NAL_PPS = 8

_START_CODE = b"\x00\x00\x01"
_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024
_TB = _GB * 1024


def find_startcode(data: bytes, start: int = 0) -> int:
    """Return the offset of the next Annex B start code at or after ``start``.

    A four-byte start code is reported at its leading zero. When none is
    found, ``len(data)`` is returned.
    """
    found = bytes(data).find(_START_CODE, start)
    if found < 0:
        return len(data)
    if found > start and data[found - 1] == 0:
        found -= 1
    return found


def avc_get_sps_pps(data: bytes) -> tuple[bytes | None, bytes | None]:
    """Return the last SPS and PPS NAL units found in an Annex B stream."""
    data = bytes(data)
    end = len(data)
    sps = pps = None
    nal_start = find_startcode(data, 0)
    while True:
        while nal_start < end:
            byte = data[nal_start]
            nal_start += 1
            if byte:
                break
        if nal_start >= end:
            break
        nal_end = find_startcode(data, nal_start)
        nal_type = data[nal_start] & 0x1F
        if nal_type == NAL_SPS:
            sps = data[nal_start:nal_end]
        elif nal_type == NAL_PPS:
            pps = data[nal_start:nal_end]
        nal_start = nal_end
    return sps, pps


def data_volume_display(total_bytes: int) -> str:
    """Format a byte count for display, e.g. ``"1.5 MB"``."""
    if total_bytes < 0:
        raise ValueError("total_bytes must not be negative")
    if total_bytes == 0:
        return "0.0 MB"
    if total_bytes < _KB:
        return f"{total_bytes} bytes"
    for limit, unit, label in ((_MB, _KB, "KB"), (_GB, _MB, "MB"), (_TB, _GB, "GB")):
        if total_bytes < limit:
            return f"{total_bytes / unit:.1f} {label}"
    return f"{total_bytes / _TB:.1f} TB"