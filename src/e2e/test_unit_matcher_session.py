import pytest

from keybinds import assign_keybindings
from keybinds.matcher import BindingIndex, KeybindingSession, press
from keybinds.models import Empty, Matched, Partial, Rejected, RuntimeInputState

COMICS = {1: "comi", 2: "comm", 3: "come"}


def test_partial_reject_then_match():
    s = KeybindingSession({1: "ge", 2: "tr"})
    assert s.press("g") == Partial(buffer="g")
    assert s.press("z") == Rejected(char="z", buffer="g")
    assert s.buffer == "g"
    assert s.warning == "z"
    assert s.press("e") == Matched(entity_id=1, binding="ge")
    # a successful selection resets the session
    assert s.state == RuntimeInputState()


def test_valid_character_clears_warning():
    s = KeybindingSession(COMICS)
    s.press("x")
    assert s.warning == "x"
    assert s.press("c") == Partial(buffer="c")
    assert s.warning is None


def test_typing_every_binding_matches_without_rejections():
    keys = assign_keybindings([(1, "Comics"), (2, "Communism"), (3, "Comedians"), (4, "Jazz"), (5, "J")])
    for eid, binding in keys.items():
        s = KeybindingSession(keys)
        outcomes = s.type_keys(binding)
        assert all(isinstance(o, Partial) for o in outcomes[:-1])
        assert outcomes[-1] == Matched(entity_id=eid, binding=binding)


def test_rejection_leaves_buffer_unchanged():
    s = KeybindingSession(COMICS)
    s.type_keys("co")
    for ch in "xyz9":
        assert s.press(ch) == Rejected(char=ch, buffer="co")
        assert s.buffer == "co"


def test_uppercase_input_is_folded():
    s = KeybindingSession({1: "ge", 2: "tr"})
    assert s.press("G") == Partial(buffer="g")


def test_backspace_and_escape():
    s = KeybindingSession(COMICS)
    s.type_keys("co")
    assert s.backspace() == Partial(buffer="c")
    assert s.press("Backspace") == Empty()
    assert s.backspace() == Empty()

    s.type_keys("cox")
    assert s.warning == "x"
    assert s.press("Escape") == Empty()
    assert s.state == RuntimeInputState()


def test_next_keys_and_candidates():
    s = KeybindingSession(COMICS)
    s.type_keys("com")
    assert s.next_keys() == ["e", "i", "m"]
    assert s.candidates() == [(3, "come"), (1, "comi"), (2, "comm")]


def test_resume_from_caller_buffer():
    assert KeybindingSession.resume(COMICS, "co").buffer == "co"
    assert KeybindingSession.resume(COMICS, "").buffer == ""
    with pytest.raises(ValueError):
        KeybindingSession.resume(COMICS, "x")
    with pytest.raises(ValueError):
        KeybindingSession.resume(COMICS, "comi")


def test_control_words_and_empty_assignment_are_rejected():
    assert KeybindingSession(COMICS).press("Enter") == Rejected(char="Enter", buffer="")
    assert KeybindingSession({}).press("a") == Rejected(char="a", buffer="")


def test_pure_press_transition():
    index = BindingIndex({1: "ge"})
    state, outcome = press(RuntimeInputState(), "g", index)
    assert state == RuntimeInputState(buffer="g")
    assert outcome == Partial(buffer="g")


def test_any_hashable_id_matches():
    s = KeybindingSession({None: "x", ("a", 1): "y"})
    assert s.press("x") == Matched(entity_id=None, binding="x")
    assert s.press("y") == Matched(entity_id=("a", 1), binding="y")
