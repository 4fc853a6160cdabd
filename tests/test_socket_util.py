import socket

import pytest

from xopnet import socket_util


@pytest.fixture
def server():
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(("127.0.0.1", 0))
    srv.listen(5)
    yield srv
    srv.close()


@pytest.fixture
def sock():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    yield s
    s.close()


@pytest.fixture
def closed_sock():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.close()
    return s


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


@pytest.mark.parametrize(
    "ip, expected",
    [("::1", True), ("fe80::1", True), ("127.0.0.1", False), ("garbage", False), ("", False)],
)
def test_is_ipv6_address(ip, expected):
    assert socket_util.is_ipv6_address(ip) is expected


def test_ipv4_socket_is_not_ipv6(sock):
    assert socket_util.is_ipv6_socket(sock) is False


def test_bind_and_socket_ip(sock):
    socket_util.bind(sock, "127.0.0.1", 0)
    assert socket_util.get_socket_ip(sock) == "127.0.0.1"
    assert sock.getsockname()[1] > 0


def test_bind_to_port_in_use_raises(server, sock):
    port = server.getsockname()[1]
    with pytest.raises(OSError):
        socket_util.bind(sock, "127.0.0.1", port)


def test_unconnected_peer_defaults(sock):
    assert socket_util.get_peer_ip(sock) == "0.0.0.0"
    assert socket_util.get_peer_port(sock) == 0


def test_connect_with_timeout(server, sock):
    port = server.getsockname()[1]
    socket_util.connect(sock, "127.0.0.1", port, 1000)
    accepted, _ = server.accept()
    try:
        assert sock.getblocking() is True
        assert socket_util.get_peer_port(sock) == port
        assert socket_util.get_peer_ip(sock) == "127.0.0.1"
        assert socket_util.get_peer_port(accepted) == sock.getsockname()[1]
    finally:
        accepted.close()


def test_connect_without_timeout(server, sock):
    port = server.getsockname()[1]
    socket_util.connect(sock, "127.0.0.1", port)
    accepted, _ = server.accept()
    try:
        assert socket_util.get_peer_port(sock) == port
        assert socket_util.get_peer_ip(accepted) == "127.0.0.1"
        sock.sendall(b"ping")
        assert accepted.recv(4) == b"ping"
    finally:
        accepted.close()


def test_connect_refused_raises(sock):
    port = _free_port()
    with pytest.raises(OSError):
        socket_util.connect(sock, "127.0.0.1", port)


def test_non_block_and_block(sock):
    socket_util.set_non_block(sock)
    assert sock.getblocking() is False
    socket_util.set_block(sock, 500)
    assert sock.getblocking() is True


def test_reuse_addr(sock, closed_sock):
    socket_util.set_reuse_addr(sock)
    assert bool(sock.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR)) is True
    with pytest.raises(OSError):
        socket_util.set_reuse_addr(closed_sock)


def test_reuse_port_reports_support(sock):
    assert socket_util.set_reuse_port(sock) is hasattr(socket, "SO_REUSEPORT")


def test_keep_alive(sock, closed_sock):
    socket_util.set_keep_alive(sock)
    assert bool(sock.getsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE)) is True
    with pytest.raises(OSError):
        socket_util.set_keep_alive(closed_sock)


def test_no_delay(sock, closed_sock):
    socket_util.set_no_delay(sock)
    assert bool(sock.getsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY)) is True
    with pytest.raises(OSError):
        socket_util.set_no_delay(closed_sock)


def test_no_sigpipe_reports_support(sock):
    assert socket_util.set_no_sigpipe(sock) is hasattr(socket, "SO_NOSIGPIPE")


def test_buffer_sizes(sock):
    socket_util.set_recv_buf_size(sock, 65536)
    socket_util.set_send_buf_size(sock, 65536)
    assert sock.getsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF) >= 65536
    assert sock.getsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF) >= 65536