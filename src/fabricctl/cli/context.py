# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/cli/context.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple

import typer

from fabricctl.config.models import FabricConfig
from fabricctl.errors import FabricError
from fabricctl.node.state import LocalStateStore
from fabricctl.observers.dispatcher import EventBus
from fabricctl.observers.events import new_ctx
from fabricctl.observers.jsonfile import JsonFileObserver
from fabricctl.observers.logger import LoggerObserver
from fabricctl.terminal.terminal import Terminal


@dataclass
class CommandContext:
    """Shared state the root callback hands to every sub-command."""

    home: Path
    config: FabricConfig
    terminal: Terminal
    store: LocalStateStore
    logger: logging.Logger
    run_id: str
    log_dir: Path

    def events(self, command: str) -> Tuple[EventBus, dict]:
        bus = EventBus(
            observers=[
                LoggerObserver(self.logger),
                JsonFileObserver(self.log_dir / f"{self.run_id}.jsonl"),
            ]
        )
        return bus, new_ctx(command, run_id=self.run_id)


@contextmanager
def reported_errors(terminal: Terminal, logger: logging.Logger) -> Iterator[None]:
    """Turn any FabricError into one message on stderr and exit code 1."""
    try:
        yield
    except FabricError as exc:
        logger.debug("command failed", exc_info=True)
        terminal.error(str(exc))
        raise typer.Exit(1)
