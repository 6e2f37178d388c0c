# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/terminal/output.py

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape

from fabricctl.node.models import DeletionOutcome


class OutputFormat(str, Enum):
    PLAIN = "plain"
    MACHINE = "machine"
    JSON = "json"


def fmt_ok(text: str) -> str:
    return f"[green]✔[/green] {text}"


def fmt_warn(text: str) -> str:
    return f"[yellow]⚠[/yellow] {text}"


def fmt_log(text: str) -> str:
    return f"  {text}"


def res(value: Any) -> str:
    """Highlight a resource name inside plain output."""
    return f"[bold cyan]{escape(str(value))}[/bold cyan]"


@dataclass(frozen=True)
class Rendered:
    """
    One outcome in its three forms. ``machine`` and ``json`` are optional;
    missing forms fall back to the next simpler one.
    """
    plain: str
    machine: Optional[str] = None
    json: Any = None


class Output:
    """Writes a :class:`Rendered` outcome in the selected format."""

    def __init__(self, console: Console, fmt: OutputFormat = OutputFormat.PLAIN):
        self.console = console
        self.fmt = fmt

    def select(self, rendered: Rendered) -> str:
        if self.fmt is OutputFormat.JSON and rendered.json is not None:
            return json.dumps(rendered.json, default=str)
        if self.fmt in (OutputFormat.JSON, OutputFormat.MACHINE) and rendered.machine is not None:
            return rendered.machine
        return rendered.plain

    def write_line(self, rendered: Rendered) -> None:
        text = self.select(rendered)
        if self.fmt is OutputFormat.PLAIN or text is rendered.plain:
            self.console.print(text, soft_wrap=True, highlight=False)
        else:
            # verbatim; rich would expand tabs and emoji codes
            typer.echo(text, file=self.console.file)


# ---------------------------------------------------------------------
# Result presenters
# ---------------------------------------------------------------------
def node_deleted(name: str) -> Rendered:
    return Rendered(
        plain=fmt_ok(f"Node with name {res(name)} has been deleted"),
        machine=name,
        json={"node": {"name": name}},
    )


def all_nodes_deleted(names: Sequence[str]) -> Rendered:
    return Rendered(
        plain=fmt_ok("All nodes have been deleted"),
        machine="\n".join(names),
        json={"nodes": [{"name": n} for n in names]},
    )


def nothing_selected() -> Rendered:
    return Rendered(
        plain="No nodes selected for deletion",
        machine="",
        json={"nodes": []},
    )


def selection_report(outcomes: Sequence[DeletionOutcome]) -> Rendered:
    lines: List[str] = []
    for o in outcomes:
        if o.ok:
            lines.append(fmt_ok(f"Deleted Node: {res(o.name)}"))
        else:
            lines.append(fmt_warn(f"Failed to delete Node: {res(o.name)}, Error: {escape(o.error)}"))
    return Rendered(
        plain="\n".join(lines),
        machine="\n".join(f"{o.name}\t{'ok' if o.ok else 'failed'}" for o in outcomes),
        json={
            "nodes": [
                {"name": o.name, "deleted": o.ok, "error": o.error} for o in outcomes
            ]
        },
    )


def node_list(names: Sequence[str], default: Optional[str]) -> Rendered:
    if not names:
        plain = "No nodes found"
    else:
        plain = "\n".join(
            f"{res(n)}{' (default)' if n == default else ''}" for n in names
        )
    return Rendered(
        plain=plain,
        machine="\n".join(names),
        json=[{"name": n, "default": n == default} for n in names],
    )


def inlet_created(inlet, node: str, route: str) -> Rendered:
    return Rendered(
        plain=(
            fmt_ok(f"TCP Inlet {res(inlet.bind_addr)} on node {res(node)} is now sending traffic\n")
            + fmt_log(f"to the outlet at {res(route)}")
        ),
        machine=inlet.bind_addr,
        json=inlet.model_dump(),
    )
