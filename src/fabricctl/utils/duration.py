# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import re
from datetime import timedelta

_UNITS = {
    "ms": 0.001,
    "s": 1.0,
    "sec": 1.0,
    "secs": 1.0,
    "m": 60.0,
    "min": 60.0,
    "mins": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d+)?)\s*([a-z]+)")


def parse_duration(text: str) -> timedelta:
    """
    Parse a human duration such as ``5s``, ``500ms`` or ``1m30s``.

    A bare ``0`` is accepted so that ``--retry-wait 0`` reads naturally.
    """
    raw = text.strip().lower()
    if raw == "0":
        return timedelta(0)
    if not raw:
        raise ValueError("empty duration")

    seconds = 0.0
    pos = 0
    for m in _COMPONENT.finditer(raw):
        if m.start() != pos and raw[pos:m.start()].strip():
            raise ValueError(f"invalid duration: {text!r}")
        unit = m.group(2)
        if unit not in _UNITS:
            raise ValueError(f"unknown duration unit {unit!r} in {text!r}")
        seconds += float(m.group(1)) * _UNITS[unit]
        pos = m.end()

    if pos == 0 or raw[pos:].strip():
        raise ValueError(f"invalid duration: {text!r}")

    return timedelta(seconds=seconds)


def format_duration(value: timedelta) -> str:
    total_ms = int(round(value.total_seconds() * 1000))
    if total_ms % 1000:
        return f"{total_ms}ms"
    return f"{total_ms // 1000}s"
