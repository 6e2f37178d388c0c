# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/cli/tcp_inlet.py
from __future__ import annotations

from typing import Optional

import typer

from fabricctl.errors import ConfigurationError, NodeNotFoundError
from fabricctl.inlet.client import HttpNodeClient
from fabricctl.inlet.create import run_create_inlet
from fabricctl.inlet.models import InletRequest
from fabricctl.inlet.route import DEFAULT_TO_ROUTE, Route
from fabricctl.node.models import NodeRecord
from fabricctl.node.state import StateStore, get_default_node_name
from fabricctl.terminal.output import fmt_log, res
from fabricctl.utils.duration import parse_duration
from fabricctl.utils.net import default_from_addr

from .context import CommandContext, reported_errors
from .parsers import (
    alias_option,
    duration_option,
    node_name_option,
    socket_addr_option,
)

tcp_inlet_app = typer.Typer(help="Manage TCP inlets", no_args_is_help=True)


@tcp_inlet_app.command("create")
def create(
    ctx: typer.Context,
    at: Optional[str] = typer.Option(None, "--at", help="Node on which to start the tcp inlet"),
    from_: Optional[str] = typer.Option(
        None, "--from",
        help="Address on which to accept tcp connections (default: a free port on 127.0.0.1)",
    ),
    to: str = typer.Option(DEFAULT_TO_ROUTE, "--to", help="Route to a tcp outlet"),
    authorized: Optional[str] = typer.Option(
        None, "--authorized", help="Authorized identity for secure channel connection",
    ),
    alias: Optional[str] = typer.Option(None, "--alias", help="Assign a name to this inlet"),
    connection_wait: Optional[str] = typer.Option(
        None, "--connection-wait", help="Time to wait for the outlet to be available [default: 5s]",
    ),
    retry_wait: Optional[str] = typer.Option(
        None, "--retry-wait", help="Time to wait before retrying to connect to outlet [default: 20s]",
    ),
    timeout: Optional[str] = typer.Option(None, "--timeout", help="Overall time limit"),
):
    """
    Ask a node to open a local TCP listener that tunnels to a remote outlet.
    """
    c: CommandContext = ctx.obj
    cfg = c.config

    bind_addr = socket_addr_option(from_, "--from") if from_ is not None else default_from_addr()
    wait = duration_option(connection_wait, "--connection-wait")
    if wait is None:
        wait = parse_duration(cfg.default_connection_wait)
    retry = duration_option(retry_wait, "--retry-wait")
    if retry is None:
        retry = parse_duration(cfg.default_retry_wait)
    overall = duration_option(timeout, "--timeout")
    alias = alias_option(alias)
    at = node_name_option(at)

    with reported_errors(c.terminal, c.logger):
        c.terminal.write_line(fmt_log(f"Creating TCP Inlet at {res(bind_addr)}...\n"))

        route = Route.parse(to).resolve_nodes(lambda n: _listener_port(c.store, n, to))

        node_name = at or get_default_node_name(c.store, cfg.default_node_name)
        record = _target_node(c.store, node_name, explicit=at is not None)

        request = InletRequest(
            node=node_name,
            bind_addr=bind_addr,
            route=route,
            alias=alias,
            authorized=authorized,
            connection_wait=wait,
            retry_wait=retry,
            timeout=overall,
        )
        c.logger.debug("inlet request: %s", request)

        channel = HttpNodeClient(
            record.api_address,
            request_timeout=cfg.request_timeout_delta(),
            deadline=overall,
        )
        bus, run_ctx = c.events("tcp-inlet create")
        run_create_inlet(
            request,
            channel,
            c.terminal,
            bus=bus,
            run_ctx=run_ctx,
            poll_interval=cfg.poll_interval_seconds(),
        )


def _listener_port(store: StateStore, name: str, route: str) -> Optional[int]:
    try:
        return store.get_node(name).tcp_listener_port
    except NodeNotFoundError as exc:
        raise ConfigurationError(f"Unknown node '{name}' in route {route}") from exc


def _target_node(store: StateStore, name: str, *, explicit: bool) -> NodeRecord:
    try:
        return store.get_node(name)
    except NodeNotFoundError as exc:
        if explicit:
            raise
        raise NodeNotFoundError(
            f"Default node '{name}' not found. Create a node first or pick one with --at NODE."
        ) from exc
