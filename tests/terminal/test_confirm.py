import pytest

from fabricctl.errors import ConfirmationRequiredError
from fabricctl.terminal.confirm import confirm


def _never(prompt):
    raise AssertionError("should not prompt")


def test_yes_flag_skips_the_prompt():
    assert confirm(True, "Delete?", interactive=False, ask=_never) is True
    assert confirm(True, "Delete?", interactive=True, ask=_never) is True


def test_non_interactive_without_yes_fails():
    with pytest.raises(ConfirmationRequiredError, match="--yes"):
        confirm(False, "Delete?", interactive=False, ask=_never)


@pytest.mark.parametrize("answer", [True, False])
def test_interactive_answer_decides(answer):
    asked = []

    def ask(prompt):
        asked.append(prompt)
        return answer

    assert confirm(False, "Delete?", interactive=True, ask=ask) is answer
    assert asked == ["Delete?"]


def test_confirm_interactively_treats_eof_as_no(terminal_factory):
    class EofTerminal(terminal_factory):
        def confirm(self, prompt):
            raise EOFError

    assert EofTerminal().confirm_interactively("Delete these?") is False
