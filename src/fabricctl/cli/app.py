# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from fabricctl.config.loader import default_home, load_config
from fabricctl.errors import ConfigurationError
from fabricctl.logging.log import init_logging
from fabricctl.node.state import LocalStateStore
from fabricctl.terminal.output import OutputFormat
from fabricctl.terminal.terminal import Terminal

from .context import CommandContext
from .node import node_app
from .tcp_inlet import tcp_inlet_app

# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Fabric node operator CLI", no_args_is_help=True)
app.add_typer(node_app, name="node")
app.add_typer(tcp_inlet_app, name="tcp-inlet")


@app.callback()
def main(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(
        OutputFormat.PLAIN,
        "--output",
        help="Result format: plain, machine (single token) or json",
    ),
    no_input: bool = typer.Option(False, "--no-input", help="Never prompt; fail instead"),
    debug: bool = typer.Option(False, "--debug", help="Log DEBUG output to stderr"),
    home: Optional[Path] = typer.Option(
        None,
        "--home",
        help="State and config directory (default: $FABRICCTL_HOME or ~/.fabricctl)",
    ),
):
    home = (home or default_home()).expanduser()
    terminal = Terminal(output_format=output, no_input=no_input)

    try:
        cfg = load_config(home)
    except ConfigurationError as exc:
        terminal.error(str(exc))
        raise typer.Exit(1)

    log_dir = cfg.log_dir or home / "logs"
    logger, run_id, _ = init_logging(base_dir=log_dir, verbose=debug)
    logger.debug("home=%s output=%s no_input=%s", home, output.value, no_input)

    ctx.obj = CommandContext(
        home=home,
        config=cfg,
        terminal=terminal,
        store=LocalStateStore(home),
        logger=logger,
        run_id=run_id,
        log_dir=log_dir,
    )


if __name__ == "__main__":
    app()
