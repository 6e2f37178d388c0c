# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/inlet/route.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from fabricctl.errors import ConfigurationError

PROTOCOLS = {
    "node",
    "project",
    "service",
    "secure",
    "ip4",
    "ip6",
    "dnsaddr",
    "tcp",
    "worker",
}

DEFAULT_TO_ROUTE = "/project/default/service/forward_to_default/secure/api/service/outlet"


@dataclass(frozen=True)
class Route:
    """
    An ordered list of ``(protocol, value)`` hops, written as
    ``/proto/value/proto/value``.
    """

    segments: Tuple[Tuple[str, str], ...]

    @classmethod
    def parse(cls, text: str) -> "Route":
        raw = text.strip()
        if not raw.startswith("/"):
            raise ConfigurationError(f"Route must start with '/': {text!r}")

        parts = raw.strip("/").split("/")
        if len(parts) % 2 != 0:
            raise ConfigurationError(f"Route has a protocol without a value: {text!r}")

        segments = []
        for proto, value in zip(parts[0::2], parts[1::2]):
            if proto not in PROTOCOLS:
                raise ConfigurationError(f"Unknown protocol '{proto}' in route {text!r}")
            if not value:
                raise ConfigurationError(f"Empty value for '{proto}' in route {text!r}")
            if proto == "tcp" and not value.isdigit():
                raise ConfigurationError(f"Invalid tcp port '{value}' in route {text!r}")
            segments.append((proto, value))

        return cls(segments=tuple(segments))

    def __str__(self) -> str:
        return "".join(f"/{p}/{v}" for p, v in self.segments)

    def starts_with_project(self) -> bool:
        return bool(self.segments) and self.segments[0][0] == "project"

    def resolve_nodes(self, port_of: Callable[[str], Optional[int]]) -> "Route":
        """
        Replace every ``/node/NAME`` hop with the node's local TCP listener.

        ``port_of`` returns the listener port for a node name, or ``None``
        when the node has no listener.
        """
        out = []
        for proto, value in self.segments:
            if proto != "node":
                out.append((proto, value))
                continue
            port = port_of(value)
            if port is None:
                raise ConfigurationError(f"Node '{value}' has no TCP listener to route through")
            out.extend([("ip4", "127.0.0.1"), ("tcp", str(port))])
        return Route(segments=tuple(out))


def default_to_route() -> Route:
    return Route.parse(DEFAULT_TO_ROUTE)
