# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/cli/node.py
from __future__ import annotations

from typing import Optional

import typer

from fabricctl.node.delete import NodeDeleter
from fabricctl.node.selection import resolve_deletion_target
from fabricctl.terminal import output

from .context import CommandContext, reported_errors

node_app = typer.Typer(help="Manage local nodes", no_args_is_help=True)


@node_app.command("delete")
def delete(
    ctx: typer.Context,
    node_name: Optional[str] = typer.Argument(None, help="Name of the node to be deleted"),
    all_nodes: bool = typer.Option(
        False, "--all", "-a",
        help="Terminate all node processes and delete all node configurations",
    ),
    force: bool = typer.Option(
        False, "--force", "-f",
        help="Terminate node process(es) immediately (SIGKILL instead of SIGTERM)",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Confirm the deletion without prompting"),
):
    """
    Delete one node, all nodes, or an interactively selected set.
    """
    c: CommandContext = ctx.obj
    if node_name is not None and all_nodes:
        raise typer.BadParameter("NAME and --all can not be used together", param_hint="--all")

    with reported_errors(c.terminal, c.logger):
        target = resolve_deletion_target(
            node_name,
            all_nodes,
            c.store.list_node_names(),
            c.terminal.can_ask_for_user_input(),
            c.terminal.select_multiple,
        )
        c.logger.debug("deletion target: %s", target)

        bus, run_ctx = c.events("node delete")
        NodeDeleter(
            c.store,
            c.terminal,
            bus=bus,
            run_ctx=run_ctx,
            default_node_name=c.config.default_node_name,
        ).run(target, force=force, yes=yes)


@node_app.command("list")
def list_nodes(ctx: typer.Context):
    """List the locally known nodes."""
    c: CommandContext = ctx.obj
    with reported_errors(c.terminal, c.logger):
        names = c.store.list_node_names()
        c.terminal.stdout().write_line(output.node_list(names, c.store.default_node_name()))
