# src/fabricctl/node/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from pydantic import BaseModel, Field


class NodeRecord(BaseModel):
    """
    Persisted description of a locally running node (``node.yaml``).
    """
    name: str
    pid: Optional[int] = None                        # OS process id, if the node is running
    api_address: str = "127.0.0.1:6252"              # host:port of the node control API
    tcp_listener_port: Optional[int] = Field(default=None, ge=1, le=65535)


# ---------------------------------------------------------------------
# Deletion target: exactly one of the variants below
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class DeleteAll:
    pass

@dataclass(frozen=True)
class DeleteSingle:
    name: str

@dataclass(frozen=True)
class DeleteSelected:
    names: Tuple[str, ...]

@dataclass(frozen=True)
class DeleteDefault:
    pass


DeletionTarget = Union[DeleteAll, DeleteSingle, DeleteSelected, DeleteDefault]


@dataclass(frozen=True)
class DeletionOutcome:
    name: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
