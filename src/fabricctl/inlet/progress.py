# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/inlet/progress.py

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Sequence

log = logging.getLogger("fabricctl")


class CompletionFlag:
    """
    Set once by the retry engine when the inlet is up; polled by the
    progress reporter.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._value = False

    async def set(self) -> None:
        async with self._lock:
            self._value = True

    async def is_set(self) -> bool:
        async with self._lock:
            return self._value


class ProgressReporter:
    """
    Shows the milestone messages one after another while the inlet is
    being created, then idles until the engine is done.

    It stops as soon as the completion flag is set or the engine task
    finishes for any other reason (fatal error, timeout). Reporting
    problems are logged and never fail the command.
    """

    def __init__(
        self,
        messages: Sequence[str],
        flag: CompletionFlag,
        emit: Callable[[str], None],
        *,
        poll_interval: float = 0.1,
        message_interval: float = 0.5,
    ):
        self.messages = list(messages)
        self.flag = flag
        self.emit = emit
        self.poll_interval = poll_interval
        self.message_interval = message_interval
        self.shown: list[str] = []

    async def _should_stop(self, engine: Optional[asyncio.Future]) -> bool:
        if await self.flag.is_set():
            return True
        return engine is not None and engine.done()

    async def _wait(self, seconds: float, engine: Optional[asyncio.Future]) -> bool:
        """Sleep up to ``seconds`` in poll steps; ``True`` if told to stop."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + seconds
        while loop.time() < deadline:
            if await self._should_stop(engine):
                return True
            await asyncio.sleep(min(self.poll_interval, max(deadline - loop.time(), 0)))
        return await self._should_stop(engine)

    async def run(self, engine: Optional[asyncio.Future] = None) -> None:
        try:
            for message in self.messages:
                if await self._should_stop(engine):
                    return
                self.emit(message)
                self.shown.append(message)
                if await self._wait(self.message_interval, engine):
                    return

            while not await self._should_stop(engine):
                await asyncio.sleep(self.poll_interval)
        except asyncio.CancelledError:
            raise
        except Exception:
            log.debug("progress reporting failed", exc_info=True)
