# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/terminal/terminal.py

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.status import Status

from .confirm import confirm
from .output import Output, OutputFormat

log = logging.getLogger("fabricctl")


class Spinner:
    """
    Live status line shown on stderr while a long operation runs.
    """

    def __init__(self, console: Console, message: str = ""):
        self._status = Status(message, console=console, spinner="dots")
        self._status.start()

    def set_message(self, message: str) -> None:
        self._status.update(status=message)

    def finish(self) -> None:
        self._status.stop()


class Terminal:
    """
    Everything the commands need from the operator's terminal: prompts,
    the progress spinner and the stdout result channel.
    """

    def __init__(
        self,
        *,
        output_format: OutputFormat = OutputFormat.PLAIN,
        no_input: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.output_format = output_format
        self.no_input = no_input
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    # ------------------ interactivity ------------------

    def can_ask_for_user_input(self) -> bool:
        return not self.no_input and sys.stdin.isatty()

    def confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, console=self.err_console, default=False)

    def confirmed_with_flag_or_prompt(self, yes: bool, prompt: str) -> bool:
        return confirm(yes, prompt, self.can_ask_for_user_input(), self.confirm)

    def confirm_interactively(self, prompt: str) -> bool:
        """Ask unconditionally; any prompt failure counts as 'no'."""
        try:
            return self.confirm(prompt)
        except (EOFError, KeyboardInterrupt):
            return False

    def select_multiple(self, prompt: str, items: Sequence[str]) -> List[str]:
        """
        Show a numbered list and read a comma separated selection.
        ``all`` picks everything; an empty answer picks nothing.
        """
        self.err_console.print(prompt, highlight=False)
        for i, item in enumerate(items, start=1):
            self.err_console.print(f"  {i}) {escape(item)}", highlight=False)

        while True:
            answer = Prompt.ask(
                "Numbers separated by commas ('all' for every item, empty for none)",
                console=self.err_console,
                default="",
                show_default=False,
            )
            picked = parse_selection(answer, items)
            if picked is not None:
                return picked
            self.err_console.print("[red]Invalid selection, try again[/red]")

    # ------------------ output ------------------

    def progress_spinner(self) -> Optional[Spinner]:
        if self.output_format is not OutputFormat.PLAIN or not self.err_console.is_terminal:
            return None
        return Spinner(self.err_console)

    def write_line(self, message: str) -> None:
        """Informational line on stderr; never part of the command's result."""
        if self.output_format is OutputFormat.PLAIN:
            self.err_console.print(message, highlight=False)

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)

    def stdout(self) -> Output:
        return Output(self.console, self.output_format)


def parse_selection(answer: str, items: Sequence[str]) -> Optional[List[str]]:
    """
    Turn ``"1, 3"`` into the matching items, keeping list order and
    dropping duplicates. Returns ``None`` when the answer is invalid.
    """
    raw = answer.strip().lower()
    if not raw:
        return []
    if raw == "all":
        return list(items)

    indexes = set()
    for part in raw.split(","):
        part = part.strip()
        if not part.isdigit() or not 1 <= int(part) <= len(items):
            log.debug("rejected selection entry %r", part)
            return None
        indexes.add(int(part) - 1)
    return [item for i, item in enumerate(items) if i in indexes]
