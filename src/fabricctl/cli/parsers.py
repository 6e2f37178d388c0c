# src/fabricctl/cli/parsers.py
from __future__ import annotations

from datetime import timedelta
from typing import Optional

import typer

from fabricctl.utils.duration import parse_duration
from fabricctl.utils.net import SocketAddress, parse_socket_addr


def duration_option(value: Optional[str], flag: str) -> Optional[timedelta]:
    if value is None:
        return None
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=flag)


def socket_addr_option(value: str, flag: str) -> SocketAddress:
    try:
        return parse_socket_addr(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=flag)


def alias_option(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not value.strip():
        raise typer.BadParameter("an inlet alias must not be empty", param_hint="--alias")
    if ":" in value:
        raise typer.BadParameter(
            "an inlet alias must not contain ':' characters", param_hint="--alias"
        )
    return value


def node_name_option(value: Optional[str]) -> Optional[str]:
    """Accepts ``NAME`` or ``/node/NAME``."""
    if value is None:
        return None
    name = value[len("/node/"):] if value.startswith("/node/") else value
    if not name or "/" in name:
        raise typer.BadParameter(f"invalid node name {value!r}", param_hint="--at")
    return name
