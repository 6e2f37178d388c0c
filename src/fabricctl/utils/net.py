# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/utils/net.py

from __future__ import annotations

import ipaddress
import logging
import socket
from dataclasses import dataclass

from fabricctl.errors import AddressInUseError

log = logging.getLogger("fabricctl")

LOOPBACK = "127.0.0.1"


@dataclass(frozen=True)
class SocketAddress:
    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def parse_socket_addr(text: str) -> SocketAddress:
    """
    Accepts ``HOST:PORT``, ``[V6]:PORT``, ``:PORT`` or a bare ``PORT``.
    Missing hosts and ``localhost`` resolve to the IPv4 loopback.
    """
    raw = text.strip()
    if not raw:
        raise ValueError("empty socket address")

    if raw.isdigit():
        host, port_text = LOOPBACK, raw
    elif raw.startswith("["):
        end = raw.find("]")
        if end == -1 or raw[end + 1:end + 2] != ":":
            raise ValueError(f"invalid socket address: {text!r}")
        host, port_text = raw[1:end], raw[end + 2:]
    else:
        host, sep, port_text = raw.rpartition(":")
        if not sep:
            raise ValueError(f"socket address needs a port: {text!r}")
        host = host or LOOPBACK

    if host == "localhost":
        host = LOOPBACK

    try:
        ipaddress.ip_address(host)
    except ValueError as exc:
        raise ValueError(f"invalid IP address {host!r} in {text!r}") from exc

    if not port_text.isdigit() or not 0 <= int(port_text) <= 65535:
        raise ValueError(f"invalid port {port_text!r} in {text!r}")

    return SocketAddress(host=host, port=int(port_text))


def find_available_port(host: str = LOOPBACK) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


def default_from_addr() -> SocketAddress:
    return SocketAddress(host=LOOPBACK, port=find_available_port())


def is_port_free(addr: SocketAddress) -> bool:
    """Return ``True`` if *addr* can be bound right now."""
    family = socket.AF_INET6 if ":" in addr.host else socket.AF_INET
    with socket.socket(family, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((addr.host, addr.port))
        except OSError as exc:
            log.debug("bind probe on %s failed: %s", addr, exc)
            return False
    return True


def port_is_free_guard(addr: SocketAddress) -> None:
    if not is_port_free(addr):
        raise AddressInUseError(f"Another process is already listening on {addr}")
