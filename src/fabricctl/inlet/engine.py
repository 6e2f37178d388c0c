# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/inlet/engine.py

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from fabricctl.errors import (
    ConfigurationError,
    InletCreationError,
    InletRejectedError,
    InletTimeoutError,
)
from fabricctl.observers.dispatcher import EventBus
from fabricctl.observers.events import (
    InletAttempt,
    InletCreated,
    InletFailed,
    InletRetrying,
    new_ctx,
)
from fabricctl.utils.duration import format_duration
from fabricctl.utils.net import SocketAddress, port_is_free_guard
from .client import NodeControlChannel
from .models import (
    BAD_REQUEST,
    AttemptFatal,
    AttemptResult,
    AttemptRetryable,
    AttemptSucceeded,
    Failed,
    InletRequest,
    InletStatus,
    Reply,
    Successful,
)
from .progress import CompletionFlag

log = logging.getLogger("fabricctl")


class EngineState(str, Enum):
    PROBING = "probing"
    SLEEPING = "sleeping"
    SUCCESS = "success"
    FATAL = "fatal"
    TIMED_OUT = "timed_out"


def classify(reply: Reply) -> AttemptResult:
    if isinstance(reply, Successful):
        return AttemptSucceeded(reply.inlet)
    if isinstance(reply, Failed):
        if reply.status == BAD_REQUEST:
            return AttemptFatal(
                InletRejectedError(reply.message or "bad request when creating an inlet")
            )
        return AttemptRetryable(message=reply.message, status=reply.status)
    raise TypeError(f"unhandled reply: {reply!r}")


class InletRetryEngine:
    """
    Asks a node to create an inlet until it succeeds, the node rejects the
    request, or the overall timeout expires. Attempts never overlap.
    """

    def __init__(
        self,
        channel: NodeControlChannel,
        request: InletRequest,
        flag: CompletionFlag,
        *,
        bus: Optional[EventBus] = None,
        run_ctx: Optional[dict] = None,
        on_waiting: Optional[Callable[[str], None]] = None,
        port_guard: Callable[[SocketAddress], None] = port_is_free_guard,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.channel = channel
        self.request = request
        self.flag = flag
        self.bus = bus or EventBus()
        self.run_ctx = run_ctx or new_ctx("tcp-inlet create")
        self.on_waiting = on_waiting
        self.port_guard = port_guard
        self.sleep = sleep
        self.state = EngineState.PROBING
        self.attempts = 0

    def check_preconditions(self) -> None:
        req = self.request
        self.port_guard(req.bind_addr)
        if req.route.starts_with_project() and req.authorized is not None:
            raise ConfigurationError("--authorized can not be used with project addresses")

    async def _loop(self) -> InletStatus:
        req = self.request
        while True:
            self.state = EngineState.PROBING
            self.attempts += 1
            self.bus.emit(InletAttempt(
                node=req.node, bind_addr=str(req.bind_addr), attempt=self.attempts, **self.run_ctx
            ))

            reply = await self.channel.create_inlet(
                str(req.bind_addr),
                str(req.route),
                req.alias,
                req.authorized,
                req.connection_wait,
            )
            result = classify(reply)

            if isinstance(result, AttemptSucceeded):
                await self.flag.set()
                self.state = EngineState.SUCCESS
                self.bus.emit(InletCreated(
                    node=req.node, bind_addr=result.inlet.bind_addr, attempts=self.attempts, **self.run_ctx
                ))
                return result.inlet

            if isinstance(result, AttemptFatal):
                raise result.error

            log.debug(
                "inlet creation returned a non-OK status: %s (%s)", result.status, result.message
            )
            if req.retry_wait.total_seconds() == 0:
                raise InletCreationError(f"Failed to create TCP inlet: {result.message}")

            self.bus.emit(InletRetrying(
                node=req.node, route=str(req.route), attempt=self.attempts,
                status=result.status, **self.run_ctx
            ))
            self._notify_waiting(
                f"Waiting for inlet {req.route} to be available... Retrying momentarily"
            )
            self.state = EngineState.SLEEPING
            await self.sleep(req.retry_wait.total_seconds())

    def _notify_waiting(self, message: str) -> None:
        if self.on_waiting is None:
            return
        try:
            self.on_waiting(message)
        except Exception:
            # status output never decides the outcome
            log.debug("waiting notice failed", exc_info=True)

    async def run(self) -> InletStatus:
        try:
            self.check_preconditions()
            if self.request.timeout is None:
                return await self._loop()
            try:
                return await asyncio.wait_for(self._loop(), self.request.timeout.total_seconds())
            except asyncio.TimeoutError:
                self.state = EngineState.TIMED_OUT
                raise InletTimeoutError(
                    f"Timed out after {format_duration(self.request.timeout)} "
                    f"waiting for inlet {self.request.route}"
                ) from None
        except Exception as exc:
            if self.state is not EngineState.TIMED_OUT:
                self.state = EngineState.FATAL
            self.bus.emit(InletFailed(node=self.request.node, error=str(exc), **self.run_ctx))
            raise
