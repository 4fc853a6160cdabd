"""Elapsed-time measurement and local wall-clock formatting."""

from __future__ import annotations

import time
from datetime import datetime


class Timestamp:
    """Stopwatch measuring milliseconds since creation or the last reset."""

    def __init__(self) -> None:
        self._begin = time.perf_counter()

    def reset(self) -> None:
        self._begin = time.perf_counter()

    def elapsed(self) -> int:
        """Whole milliseconds since the start point."""
        return int((time.perf_counter() - self._begin) * 1000)


def local_time_string() -> str:
    """Current local time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")