"""Process-wide logger writing to a file and to an optional callback."""

from __future__ import annotations

import sys
import threading
from enum import IntEnum
from typing import Callable, TextIO

from .timestamp import local_time_string


class Priority(IntEnum):
    DEBUG = 0
    STATE = 1
    INFO = 2
    WARNING = 3
    ERROR = 4

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = ("DEBUG", "CONFIG", "INFO", "WARNING", "ERROR")

WriteCallback = Callable[[Priority, str], None]


class Logger:
    """Formats log lines, appends them to a log file and forwards them."""

    _instance: Logger | None = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._stream: TextIO | None = None
        self._callback: WriteCallback | None = None

    @classmethod
    def instance(cls) -> "Logger":
        """Return the shared logger, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def init(self, path=None) -> None:
        """Open ``path`` as the log file; report failure on stderr."""
        if path is None:
            return
        with self._lock:
            if self._stream is not None:
                self._stream.close()
                self._stream = None
            try:
                self._stream = open(path, "w", encoding="utf-8")
            except OSError:
                print("Failed to open logfile.", file=sys.stderr)

    def exit(self) -> None:
        """Close the log file if one is open."""
        with self._lock:
            if self._stream is not None:
                self._stream.close()
                self._stream = None

    def set_write_callback(self, callback: WriteCallback | None) -> None:
        self._callback = callback

    def log(self, priority: Priority, file: str, func: str, line: int, message: str) -> str:
        """Log ``message`` tagged with its source location; return the line."""
        priority = Priority(priority)
        text = f"[{priority.label}][{file}:{func}:{line}] {message}"
        self._emit(priority, text)
        return text

    def log2(self, priority: Priority, message: str) -> str:
        """Log ``message`` tagged with its priority only; return the line."""
        priority = Priority(priority)
        text = f"[{priority.label}] {message}"
        self._emit(priority, text)
        return text

    def _emit(self, priority: Priority, text: str) -> None:
        with self._lock:
            if self._stream is not None:
                self._stream.write(f"[{local_time_string()}]{text}\n")
                self._stream.flush()
            if self._callback is not None:
                self._callback(priority, text)