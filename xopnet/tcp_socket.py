"""Owning wrapper around a TCP socket."""

from __future__ import annotations

import errno
import socket

from . import socket_util


class TcpSocket:
    """A TCP socket that may be created, bound, listened on and closed."""

    def __init__(self, sock: socket.socket | None = None, ipv6: bool | None = None) -> None:
        self._sock = sock
        if ipv6 is None:
            ipv6 = sock is not None and socket_util.is_ipv6_socket(sock)
        self._ipv6 = bool(ipv6)

    def __enter__(self) -> "TcpSocket":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def socket(self) -> socket.socket | None:
        """The underlying socket, or None when closed."""
        return self._sock

    @property
    def is_ipv6(self) -> bool:
        return self._ipv6

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise OSError(errno.EBADF, "socket is not open")
        return self._sock

    def create(self, ipv6: bool = False) -> socket.socket:
        """Open a new stream socket, closing any socket held before."""
        self.close()
        self._ipv6 = ipv6
        family = socket.AF_INET6 if ipv6 else socket.AF_INET
        self._sock = socket.socket(family, socket.SOCK_STREAM)
        return self._sock

    def bind(self, ip: str, port: int) -> None:
        sock = self._require()
        try:
            socket_util.bind(sock, ip, port)
        except OSError as exc:
            raise OSError(exc.errno, f"socket {sock.fileno()} bind {ip}:{port} failed: {exc.strerror}") from exc

    def listen(self, backlog: int) -> None:
        sock = self._require()
        try:
            sock.listen(backlog)
        except OSError as exc:
            raise OSError(exc.errno, f"socket {sock.fileno()} listen failed: {exc.strerror}") from exc

    def accept(self) -> socket.socket:
        """Accept one pending connection and return its socket."""
        connection, _ = self._require().accept()
        return connection

    def connect(self, ip: str, port: int, timeout: int = 0) -> None:
        """Connect to ``ip``:``port``; ``timeout`` in ms bounds the attempt."""
        socket_util.connect(self._require(), ip, port, timeout)

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def shutdown_write(self) -> None:
        """Signal end of output to the peer and release the socket."""
        self._require().shutdown(socket.SHUT_WR)
        self._sock = None

    def fileno(self) -> int:
        """Descriptor of the socket, or -1 when there is none."""
        return -1 if self._sock is None else self._sock.fileno()