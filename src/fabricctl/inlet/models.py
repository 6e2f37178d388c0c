# src/fabricctl/inlet/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from pydantic import BaseModel

from fabricctl.errors import FabricError
from fabricctl.utils.net import SocketAddress
from .route import Route

BAD_REQUEST = 400


class InletStatus(BaseModel):
    """What the node reports back for a created inlet."""
    bind_addr: str
    alias: str
    outlet_route: str
    status: str = "up"
    worker_addr: Optional[str] = None


@dataclass(frozen=True)
class InletRequest:
    """
    A fully parsed ``tcp-inlet create`` invocation. ``route`` is already
    normalized when the retry loop sees it.
    """
    node: str
    bind_addr: SocketAddress
    route: Route
    alias: Optional[str] = None
    authorized: Optional[str] = None
    connection_wait: timedelta = timedelta(seconds=5)
    retry_wait: timedelta = timedelta(seconds=20)
    timeout: Optional[timedelta] = None


# ---------------------------------------------------------------------
# Node replies
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class Successful:
    inlet: InletStatus

@dataclass(frozen=True)
class Failed:
    message: str
    status: Optional[int] = None

Reply = Union[Successful, Failed]


# ---------------------------------------------------------------------
# How the retry loop reads a reply
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class AttemptSucceeded:
    inlet: InletStatus

@dataclass(frozen=True)
class AttemptFatal:
    error: FabricError

@dataclass(frozen=True)
class AttemptRetryable:
    message: str
    status: Optional[int] = None

AttemptResult = Union[AttemptSucceeded, AttemptFatal, AttemptRetryable]
