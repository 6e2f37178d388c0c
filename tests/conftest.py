import io
from pathlib import Path

import pytest
from rich.console import Console

from fabricctl.node.models import NodeRecord
from fabricctl.node.state import LocalStateStore
from fabricctl.terminal.output import OutputFormat
from fabricctl.terminal.terminal import Terminal


class ScriptedTerminal(Terminal):
    """Terminal whose prompts are answered from a script."""

    def __init__(self, *, interactive=True, answers=(), picks=None, fmt=OutputFormat.PLAIN):
        super().__init__(
            output_format=fmt,
            console=Console(file=io.StringIO(), width=200),
            err_console=Console(file=io.StringIO(), width=200),
        )
        self.interactive = interactive
        self.answers = list(answers)
        self.picks = picks
        self.prompts = []
        self.select_calls = []

    def can_ask_for_user_input(self):
        return self.interactive

    def confirm(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)

    def select_multiple(self, prompt, items):
        self.select_calls.append((prompt, list(items)))
        return list(self.picks or [])

    def out(self):
        return self.console.file.getvalue()

    def err(self):
        return self.err_console.file.getvalue()


class FakeSupervisor:
    def __init__(self):
        self.signals = []

    def terminate(self, pid, *, sigkill=False):
        self.signals.append((pid, "SIGKILL" if sigkill else "SIGTERM"))


class Capture:
    def __init__(self): self.events = []
    def notify(self, ev): self.events.append(ev)


@pytest.fixture
def terminal_factory():
    return ScriptedTerminal


@pytest.fixture
def supervisor():
    return FakeSupervisor()


@pytest.fixture
def capture():
    return Capture()


@pytest.fixture
def store(tmp_path: Path, supervisor) -> LocalStateStore:
    return LocalStateStore(tmp_path / "home", supervisor=supervisor)


@pytest.fixture
def populated_store(store):
    for i, name in enumerate(["alpha", "beta", "gamma"]):
        store.create_node(NodeRecord(name=name, pid=1000 + i, api_address=f"127.0.0.1:{7000 + i}",
                                     tcp_listener_port=4000 + i))
    return store
