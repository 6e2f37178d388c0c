# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/inlet/create.py

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from fabricctl.observers.dispatcher import EventBus
from fabricctl.terminal import output
from fabricctl.terminal.output import fmt_log, res
from fabricctl.terminal.terminal import Terminal
from fabricctl.utils.net import SocketAddress, port_is_free_guard
from .client import NodeControlChannel
from .engine import InletRetryEngine
from .models import InletRequest, InletStatus
from .progress import CompletionFlag, ProgressReporter

log = logging.getLogger("fabricctl")


def progress_messages(request: InletRequest) -> list[str]:
    return [
        f"Creating TCP Inlet on {res(request.node)}...",
        f"Hosting TCP Socket at {res(request.bind_addr)}...",
        f"Establishing connection to outlet {res(request.route)}...",
    ]


async def create_inlet(
    request: InletRequest,
    channel: NodeControlChannel,
    terminal: Terminal,
    *,
    bus: Optional[EventBus] = None,
    run_ctx: Optional[dict] = None,
    poll_interval: float = 0.1,
    port_guard: Callable[[SocketAddress], None] = port_is_free_guard,
) -> InletStatus:
    """
    Run the retry engine and the progress reporter side by side and return
    the engine's result. The reporter has always stopped when this returns.
    """
    flag = CompletionFlag()
    spinner = terminal.progress_spinner()

    if spinner is not None:
        emit = spinner.set_message
    else:
        emit = lambda msg: terminal.write_line(fmt_log(msg))  # noqa: E731

    engine = InletRetryEngine(
        channel,
        request,
        flag,
        bus=bus,
        run_ctx=run_ctx,
        on_waiting=emit,
        port_guard=port_guard,
    )
    reporter = ProgressReporter(
        progress_messages(request),
        flag,
        emit,
        poll_interval=poll_interval,
    )

    engine_task = asyncio.ensure_future(engine.run())
    reporter_task = asyncio.ensure_future(reporter.run(engine_task))
    try:
        return await engine_task
    finally:
        await reporter_task
        if spinner is not None:
            try:
                spinner.finish()
            except Exception:
                log.debug("failed to stop the progress spinner", exc_info=True)
        log.debug("inlet creation finished after %d attempt(s), state=%s", engine.attempts, engine.state.value)


def run_create_inlet(
    request: InletRequest,
    channel: NodeControlChannel,
    terminal: Terminal,
    **kwargs,
) -> InletStatus:
    """Synchronous entry point for the CLI."""
    inlet = asyncio.run(create_inlet(request, channel, terminal, **kwargs))
    terminal.stdout().write_line(output.inlet_created(inlet, request.node, str(request.route)))
    return inlet
