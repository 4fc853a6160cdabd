"""Readiness interest and event dispatch for one file descriptor."""

from __future__ import annotations

from enum import IntFlag
from typing import Callable

EventCallback = Callable[[], None]


class EventType(IntFlag):
    """Event bits shared by every scheduler backend."""

    NONE = 0
    IN = 1
    PRI = 2
    OUT = 4
    ERR = 8
    HUP = 16
    RDHUP = 8192


def _noop() -> None:
    return None


class Channel:
    """Binds a descriptor to the events it waits for and their callbacks."""

    def __init__(self, fd) -> None:
        self.fd: int = fd if isinstance(fd, int) else fd.fileno()
        self._events = EventType.NONE
        self._on_read: EventCallback = _noop
        self._on_write: EventCallback = _noop
        self._on_close: EventCallback = _noop
        self._on_error: EventCallback = _noop

    def __repr__(self) -> str:
        return f"Channel(fd={self.fd}, events={self._events!r})"

    @property
    def events(self) -> EventType:
        """The events this channel is interested in."""
        return self._events

    @events.setter
    def events(self, value: int) -> None:
        self._events = EventType(value)

    def set_read_callback(self, callback: EventCallback) -> None:
        self._on_read = callback

    def set_write_callback(self, callback: EventCallback) -> None:
        self._on_write = callback

    def set_close_callback(self, callback: EventCallback) -> None:
        self._on_close = callback

    def set_error_callback(self, callback: EventCallback) -> None:
        self._on_error = callback

    def enable_reading(self) -> None:
        self._events |= EventType.IN

    def enable_writing(self) -> None:
        self._events |= EventType.OUT

    def disable_reading(self) -> None:
        self._events &= ~EventType.IN

    def disable_writing(self) -> None:
        self._events &= ~EventType.OUT

    def is_none_event(self) -> bool:
        return self._events == EventType.NONE

    def is_writing(self) -> bool:
        return bool(self._events & EventType.OUT)

    def is_reading(self) -> bool:
        return bool(self._events & EventType.IN)

    def handle_event(self, events: int) -> None:
        """Run the callbacks for the events that fired.

        Read runs before write; a hang-up runs the close callback and skips
        the error callback.
        """
        if events & (EventType.PRI | EventType.IN):
            self._on_read()
        if events & EventType.OUT:
            self._on_write()
        if events & EventType.HUP:
            self._on_close()
            return
        if events & EventType.ERR:
            self._on_error()