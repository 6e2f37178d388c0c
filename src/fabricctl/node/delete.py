# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/node/delete.py

from __future__ import annotations

import logging
from typing import List, Optional

from fabricctl.observers.dispatcher import EventBus
from fabricctl.observers.events import (
    AllNodesDeleted,
    NodeDeleted,
    NodeDeletionFailed,
    new_ctx,
)
from fabricctl.terminal import output
from fabricctl.terminal.terminal import Terminal
from .models import (
    DeleteAll,
    DeleteDefault,
    DeleteSelected,
    DeleteSingle,
    DeletionOutcome,
    DeletionTarget,
)
from .state import StateStore, get_default_node_name

log = logging.getLogger("fabricctl")


class NodeDeleter:
    """
    Executes a resolved :data:`DeletionTarget` against the state store.

    Single/default/all deletions raise on failure. A selected set is
    deleted one node at a time and every node gets an outcome, whatever
    happened to the others.
    """

    def __init__(
        self,
        store: StateStore,
        terminal: Terminal,
        *,
        bus: Optional[EventBus] = None,
        run_ctx: Optional[dict] = None,
        default_node_name: str = "default",
    ):
        self.store = store
        self.terminal = terminal
        self.bus = bus or EventBus()
        self.run_ctx = run_ctx or new_ctx("node delete")
        self.default_node_name = default_node_name

    def run(self, target: DeletionTarget, *, force: bool, yes: bool) -> Optional[List[DeletionOutcome]]:
        if isinstance(target, DeleteAll):
            self._delete_all(force=force, yes=yes)
            return None
        if isinstance(target, DeleteSingle):
            self._delete_one(target.name, force=force, yes=yes,
                             prompt="Are you sure you want to delete this node?")
            return None
        if isinstance(target, DeleteDefault):
            self._delete_one(None, force=force, yes=yes,
                             prompt="Are you sure you want to delete the default node?")
            return None
        if isinstance(target, DeleteSelected):
            return self._delete_selected(target.names, force=force)
        raise TypeError(f"unhandled deletion target: {target!r}")

    # ------------------------------------------------------------------

    def _delete_all(self, *, force: bool, yes: bool) -> None:
        if not self.terminal.confirmed_with_flag_or_prompt(
            yes, "Are you sure you want to delete all nodes?"
        ):
            log.debug("delete --all declined")
            return

        names = self.store.list_node_names()
        self.store.delete_all_nodes(force)
        self.bus.emit(AllNodesDeleted(names=names, force=force, **self.run_ctx))
        self.terminal.stdout().write_line(output.all_nodes_deleted(names))

    def _delete_one(self, name: Optional[str], *, force: bool, yes: bool, prompt: str) -> None:
        if not self.terminal.confirmed_with_flag_or_prompt(yes, prompt):
            log.debug("delete declined")
            return

        # the default node is resolved only now, so a node created since
        # the command started is still seen
        if name is None:
            name = get_default_node_name(self.store, self.default_node_name)

        try:
            self.store.delete_node(name, force)
        except Exception as exc:
            self.bus.emit(NodeDeletionFailed(name=name, error=str(exc), **self.run_ctx))
            raise
        self.bus.emit(NodeDeleted(name=name, force=force, **self.run_ctx))
        self.terminal.stdout().write_line(output.node_deleted(name))

    def _delete_selected(self, names, *, force: bool) -> Optional[List[DeletionOutcome]]:
        if not names:
            self.terminal.stdout().write_line(output.nothing_selected())
            return []

        if not self.terminal.confirm_interactively(
            f"Would you like to delete these items : {list(names)}?"
        ):
            log.debug("selected deletion declined")
            return None

        outcomes: List[DeletionOutcome] = []
        for name in names:
            try:
                self.store.delete_node_sigkill(name, force)
            except Exception as exc:
                log.debug("failed to delete node %s: %s", name, exc)
                self.bus.emit(NodeDeletionFailed(name=name, error=str(exc), **self.run_ctx))
                outcomes.append(DeletionOutcome(name=name, error=str(exc)))
            else:
                self.bus.emit(NodeDeleted(name=name, force=force, **self.run_ctx))
                outcomes.append(DeletionOutcome(name=name))

        self.terminal.stdout().write_line(output.selection_report(outcomes))
        return outcomes
