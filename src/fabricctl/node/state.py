# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/node/state.py

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Protocol, Tuple

import yaml
from pydantic import ValidationError

from fabricctl.errors import ConfigurationError, NodeDeletionError, NodeNotFoundError
from .models import NodeRecord
from .process import ProcessSupervisor

log = logging.getLogger("fabricctl")

NODE_FILE = "node.yaml"
DEFAULT_MARKER = "default_node"


class StateStore(Protocol):
    """
    Contract for the persisted node records the commands operate on.
    """

    def list_node_names(self) -> List[str]: ...

    def get_node(self, name: str) -> NodeRecord: ...

    def default_node_name(self) -> Optional[str]: ...

    def delete_node(self, name: str, force: bool) -> None: ...

    def delete_all_nodes(self, force: bool) -> None: ...

    def delete_node_sigkill(self, name: str, sigkill: bool) -> None: ...


class LocalStateStore:
    """
    Filesystem-backed node state::

        <home>/nodes/<name>/node.yaml
        <home>/default_node
    """

    def __init__(self, home: Path, supervisor: Optional[ProcessSupervisor] = None):
        self.home = Path(home)
        self.nodes_dir = self.home / "nodes"
        self.supervisor = supervisor or ProcessSupervisor()

    # ------------------ records ------------------

    def _node_dir(self, name: str) -> Path:
        if not name or "/" in name or name in (".", ".."):
            raise ConfigurationError(f"Invalid node name: {name!r}")
        return self.nodes_dir / name

    def list_node_names(self) -> List[str]:
        if not self.nodes_dir.is_dir():
            return []
        return sorted(
            p.name for p in self.nodes_dir.iterdir() if (p / NODE_FILE).is_file()
        )

    def get_node(self, name: str) -> NodeRecord:
        path = self._node_dir(name) / NODE_FILE
        if not path.is_file():
            raise NodeNotFoundError(f"Node '{name}' not found")
        try:
            data = yaml.safe_load(path.read_text()) or {}
            return NodeRecord.model_validate(data)
        except (yaml.YAMLError, ValidationError) as exc:
            raise ConfigurationError(f"Corrupt node state in {path}: {exc}") from exc

    def create_node(self, record: NodeRecord) -> NodeRecord:
        d = self._node_dir(record.name)
        d.mkdir(parents=True, exist_ok=True)
        (d / NODE_FILE).write_text(
            yaml.safe_dump(record.model_dump(), sort_keys=False)
        )
        if self.default_node_name() is None:
            self.set_default_node(record.name)
        log.debug("stored node %s", record.name)
        return record

    # ------------------ default node ------------------

    def default_node_name(self) -> Optional[str]:
        marker = self.home / DEFAULT_MARKER
        if not marker.is_file():
            return None
        name = marker.read_text().strip()
        return name or None

    def set_default_node(self, name: str) -> None:
        self.home.mkdir(parents=True, exist_ok=True)
        (self.home / DEFAULT_MARKER).write_text(name + "\n")

    def _clear_default_if(self, name: str) -> None:
        if self.default_node_name() == name:
            (self.home / DEFAULT_MARKER).unlink(missing_ok=True)

    # ------------------ deletion ------------------

    def delete_node_sigkill(self, name: str, sigkill: bool) -> None:
        """
        Terminate the node process (SIGKILL when ``sigkill``, else SIGTERM)
        and remove its persisted state.
        """
        record = self.get_node(name)
        if record.pid is not None:
            self.supervisor.terminate(record.pid, sigkill=sigkill)

        try:
            shutil.rmtree(self._node_dir(name))
        except OSError as exc:
            raise NodeDeletionError(f"Failed to remove state for node '{name}': {exc}") from exc

        self._clear_default_if(name)
        log.debug("deleted node %s (sigkill=%s)", name, sigkill)

    def delete_node(self, name: str, force: bool) -> None:
        self.delete_node_sigkill(name, sigkill=force)

    def delete_all_nodes(self, force: bool) -> None:
        errors: List[Tuple[str, str]] = []
        for name in self.list_node_names():
            try:
                self.delete_node_sigkill(name, sigkill=force)
            except Exception as exc:
                errors.append((name, str(exc)))

        if errors:
            detail = "; ".join(f"{n}: {e}" for n, e in errors)
            raise NodeDeletionError(f"Errors while deleting nodes: {detail}")


def get_default_node_name(store: StateStore, fallback: str = "default") -> str:
    """
    Name of the default node, looked up at the point of use.
    """
    return store.default_node_name() or fallback
