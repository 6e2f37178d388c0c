from fabricctl.node.models import DeleteAll, DeleteDefault, DeleteSelected, DeleteSingle
from fabricctl.node.selection import SELECT_PROMPT, resolve_deletion_target


class Picker:
    def __init__(self, picks): self.picks = picks; self.calls = []
    def __call__(self, prompt, items):
        self.calls.append((prompt, items))
        return self.picks


def test_all_flag_wins_over_everything():
    picker = Picker(["a"])
    target = resolve_deletion_target("n1", True, ["a", "b"], True, picker)
    assert target == DeleteAll()
    assert picker.calls == []


def test_explicit_name_beats_interactive_selection():
    picker = Picker(["a"])
    assert resolve_deletion_target("n1", False, ["a"], True, picker) == DeleteSingle("n1")
    assert picker.calls == []


def test_interactive_selection_seeded_with_known_names():
    picker = Picker(["b"])
    target = resolve_deletion_target(None, False, ["a", "b"], True, picker)
    assert target == DeleteSelected(("b",))
    assert picker.calls == [(SELECT_PROMPT, ["a", "b"])]


def test_empty_pick_is_a_valid_selection():
    target = resolve_deletion_target(None, False, ["a"], True, Picker([]))
    assert target == DeleteSelected(())


def test_non_interactive_falls_back_to_default():
    picker = Picker(["a"])
    assert resolve_deletion_target(None, False, ["a"], False, picker) == DeleteDefault()
    assert picker.calls == []


def test_no_known_nodes_still_yields_default():
    assert resolve_deletion_target(None, False, [], True, Picker([])) == DeleteDefault()
