# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/node/process.py

from __future__ import annotations

import logging
import os
import signal

from fabricctl.errors import NodeDeletionError

log = logging.getLogger("fabricctl")

SIGKILL = getattr(signal, "SIGKILL", signal.SIGTERM)


class ProcessSupervisor:
    """
    Sends termination signals to node processes.
    """

    def terminate(self, pid: int, *, sigkill: bool = False) -> None:
        sig = SIGKILL if sigkill else signal.SIGTERM
        log.debug("sending %s to pid %s", signal.Signals(sig).name, pid)
        try:
            os.kill(pid, sig)
        except ProcessLookupError:
            log.debug("pid %s is not running", pid)
        except PermissionError as exc:
            raise NodeDeletionError(f"Not allowed to signal process {pid}: {exc}") from exc
