# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .models import DeleteAll, DeleteDefault, DeleteSelected, DeleteSingle, DeletionTarget

SELECT_PROMPT = "Select one or more nodes that you want to delete"


def resolve_deletion_target(
    explicit_name: Optional[str],
    all_flag: bool,
    known_names: Sequence[str],
    interactive: bool,
    select: Callable[[str, List[str]], List[str]],
) -> DeletionTarget:
    """
    Work out what ``node delete`` should act on. First match wins:

    1. ``--all``
    2. an explicit NAME
    3. an interactive multi-select over the known nodes
    4. the default node (its name is looked up later, right before deleting)
    """
    if all_flag:
        return DeleteAll()
    if explicit_name is not None:
        return DeleteSingle(explicit_name)
    if known_names and interactive:
        picks = select(SELECT_PROMPT, list(known_names))
        return DeleteSelected(tuple(picks))
    return DeleteDefault()
