import socket

import pytest

from fabricctl.errors import AddressInUseError
from fabricctl.utils.net import (
    SocketAddress,
    default_from_addr,
    is_port_free,
    parse_socket_addr,
    port_is_free_guard,
)


@pytest.mark.parametrize("text,expected", [
    ("127.0.0.1:5000", SocketAddress("127.0.0.1", 5000)),
    ("localhost:80", SocketAddress("127.0.0.1", 80)),
    (":7000", SocketAddress("127.0.0.1", 7000)),
    ("7000", SocketAddress("127.0.0.1", 7000)),
    ("[::1]:9000", SocketAddress("::1", 9000)),
])
def test_parse_socket_addr(text, expected):
    assert parse_socket_addr(text) == expected


@pytest.mark.parametrize("text", ["", "host:80", "1.2.3.4", "1.2.3.4:99999", "[::1]9000"])
def test_parse_socket_addr_rejects(text):
    with pytest.raises(ValueError):
        parse_socket_addr(text)


def test_ipv6_is_bracketed_when_rendered():
    assert str(SocketAddress("::1", 9000)) == "[::1]:9000"


def test_default_from_addr_is_loopback_and_free():
    addr = default_from_addr()
    assert addr.host == "127.0.0.1"
    assert addr.port > 0


def test_guard_rejects_bound_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen(1)
        addr = SocketAddress("127.0.0.1", sock.getsockname()[1])
        assert not is_port_free(addr)
        with pytest.raises(AddressInUseError, match="already listening"):
            port_is_free_guard(addr)
