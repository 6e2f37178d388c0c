# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Callable

from fabricctl.errors import ConfirmationRequiredError


def confirm(
    auto_yes: bool,
    prompt: str,
    interactive: bool,
    ask: Callable[[str], bool],
) -> bool:
    """
    Decide whether a destructive action may proceed.

    - ``auto_yes`` (``--yes``) proceeds without asking.
    - Without a terminal to ask on, fail instead of guessing.
    - Otherwise the operator's answer decides; ``False`` means "do nothing".
    """
    if auto_yes:
        return True
    if not interactive:
        raise ConfirmationRequiredError(
            f"{prompt} Pass --yes to confirm when running non-interactively."
        )
    return bool(ask(prompt))
