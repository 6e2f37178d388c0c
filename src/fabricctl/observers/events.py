# src/fabricctl/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events in a single command invocation
    command: str      # e.g. "node delete", "tcp-inlet create"

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(command: str, run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
        "command": command,
    }


# ---------------------------------------------------------------------
# Node deletion
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class NodeDeleted(BaseEvent):
    name: str
    force: bool

@dataclass(frozen=True)
class NodeDeletionFailed(BaseEvent):
    name: str
    error: str

@dataclass(frozen=True)
class AllNodesDeleted(BaseEvent):
    names: List[str]
    force: bool


# ---------------------------------------------------------------------
# TCP inlet lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class InletAttempt(BaseEvent):
    node: str
    bind_addr: str
    attempt: int

@dataclass(frozen=True)
class InletRetrying(BaseEvent):
    node: str
    route: str
    attempt: int
    status: Optional[int] = None

@dataclass(frozen=True)
class InletCreated(BaseEvent):
    node: str
    bind_addr: str
    attempts: int

@dataclass(frozen=True)
class InletFailed(BaseEvent):
    node: str
    error: str
