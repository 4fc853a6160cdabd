"""Helpers for configuring and inspecting TCP sockets."""

from __future__ import annotations

import errno
import os
import select
import socket
import struct
import sys

_IN_PROGRESS = {
    code
    for code in (
        errno.EINPROGRESS,
        errno.EWOULDBLOCK,
        errno.EAGAIN,
        getattr(errno, "WSAEWOULDBLOCK", None),
        getattr(errno, "WSAEINPROGRESS", None),
    )
    if code is not None
}


def _address(sock: socket.socket, ip: str, port: int) -> tuple:
    if sock.family == socket.AF_INET6:
        return (ip, port, 0, 0)
    return (ip, port)


def bind(sock: socket.socket, ip: str, port: int) -> None:
    """Bind ``sock`` to ``ip``:``port`` using the socket's own family."""
    sock.bind(_address(sock, ip, port))


def set_non_block(sock: socket.socket) -> None:
    sock.setblocking(False)


def set_block(sock: socket.socket, write_timeout: int = 0) -> None:
    """Make ``sock`` blocking; a positive ``write_timeout`` (ms) limits sends."""
    sock.setblocking(True)
    if write_timeout > 0 and hasattr(socket, "SO_SNDTIMEO"):
        if sys.platform == "win32":
            value = struct.pack("L", write_timeout)
        else:
            value = struct.pack("ll", write_timeout // 1000, write_timeout % 1000 * 1000)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDTIMEO, value)


def set_reuse_addr(sock: socket.socket) -> None:
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)


def set_reuse_port(sock: socket.socket) -> bool:
    """Enable SO_REUSEPORT; return False where the platform lacks it."""
    option = getattr(socket, "SO_REUSEPORT", None)
    if option is None:
        return False
    sock.setsockopt(socket.SOL_SOCKET, option, 1)
    return True


def set_no_delay(sock: socket.socket) -> None:
    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)


def set_keep_alive(sock: socket.socket) -> None:
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)


def set_no_sigpipe(sock: socket.socket) -> bool:
    """Enable SO_NOSIGPIPE; return False where the platform lacks it."""
    option = getattr(socket, "SO_NOSIGPIPE", None)
    if option is None:
        return False
    sock.setsockopt(socket.SOL_SOCKET, option, 1)
    return True


def set_send_buf_size(sock: socket.socket, size: int) -> None:
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, size)


def set_recv_buf_size(sock: socket.socket, size: int) -> None:
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, size)


def is_ipv6_socket(sock: socket.socket) -> bool:
    return sock.family == socket.AF_INET6


def is_ipv6_address(ip: str) -> bool:
    """True when ``ip`` is a literal IPv6 address."""
    try:
        socket.inet_pton(socket.AF_INET6, ip)
    except (OSError, ValueError):
        return False
    return True


def get_peer_ip(sock: socket.socket) -> str:
    """Address of the connected peer, or the unspecified address if none."""
    try:
        return sock.getpeername()[0]
    except OSError:
        return "::0" if is_ipv6_socket(sock) else "0.0.0.0"


def get_socket_ip(sock: socket.socket) -> str:
    """Local address of ``sock``, or the loopback address if unavailable."""
    try:
        return sock.getsockname()[0]
    except OSError:
        return "::1" if is_ipv6_socket(sock) else "127.0.0.1"


def get_peer_port(sock: socket.socket) -> int:
    """Remote end's TCP service number, or 0 when unconnected."""
    try:
        return sock.getpeername()[1]
    except OSError:
        return 0


def connect(sock: socket.socket, ip: str, port: int, timeout: int = 0) -> None:
    """Connect ``sock`` to ``ip``:``port``.

    With a positive ``timeout`` (ms) the attempt is bounded: TimeoutError is
    raised when it runs out, and the socket is left blocking. Other failures
    raise OSError.
    """
    address = _address(sock, ip, port)
    if timeout <= 0:
        sock.connect(address)
        return
    sock.setblocking(False)
    try:
        result = sock.connect_ex(address)
        if result == 0:
            return
        if result not in _IN_PROGRESS:
            raise OSError(result, os.strerror(result))
        _, writable, _ = select.select([], [sock], [], timeout / 1000)
        if not writable:
            raise TimeoutError(f"connect to {ip}:{port} timed out")
        result = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
        if result:
            raise OSError(result, os.strerror(result))
    finally:
        sock.setblocking(True)