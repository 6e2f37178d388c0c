from __future__ import annotations
import logging
from .events import BaseEvent, InletFailed, NodeDeletionFailed

_NOTABLE_EVENTS = (InletFailed, NodeDeletionFailed)


class LoggerObserver:
    """Mirrors lifecycle events into the run log."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def notify(self, event: BaseEvent) -> None:
        fields = {k: v for k, v in event.dict().items() if k not in ("ts", "run_id")}
        level = logging.INFO if isinstance(event, _NOTABLE_EVENTS) else logging.DEBUG
        self.logger.log(
            level,
            "[EVENT] %s: %s",
            event.__class__.__name__,
            ", ".join(f"{k}={v}" for k, v in fields.items()),
        )
