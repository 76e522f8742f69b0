import pytest

from keybinds import config as CFG
from keybinds.candidates import build_candidates, generate_branches, min_length
from keybinds.models import NamedEntity


def test_single_character_is_repeated():
    assert generate_branches(["j"]) == ["j" * CFG.SINGLE_CHAR_REPEAT]
    assert generate_branches(["j"]) == ["jjjjjjjjjj"]


@pytest.mark.parametrize("word", ["cool", "banana", "general", "supercalifragilistic"])
def test_single_word_is_kept_whole(word):
    assert generate_branches([word]) == [word]


def test_two_words_expand_first_word():
    assert generate_branches(["the", "world"]) == ["tworld", "thworld", "theworld"]


def test_middle_words_contribute_initials():
    assert generate_branches(["lord", "of", "the", "rings"]) == [
        "lotrings", "lootrings", "lortrings", "lordotrings", "lordoftherings",
    ]


def test_one_letter_words_do_not_repeat_final_stage():
    assert generate_branches(["a", "b"]) == ["ab"]


@pytest.mark.parametrize("tokens", [
    ["the", "world"], ["media", "lotr"], ["summer", "2023"], ["a", "bb", "ccc", "dddd"],
])
def test_branches_grow_strictly_and_end_in_full_name(tokens):
    branches = generate_branches(tokens)
    lengths = [len(b) for b in branches]
    assert lengths == sorted(set(lengths))
    assert branches[-1] == "".join(tokens)


def test_empty_tokens_have_no_branches():
    assert generate_branches([]) == []


def test_long_single_words_keep_two_letters():
    assert min_length(["general"]) == 2
    assert min_length(["banana"]) == 1
    assert min_length(["the", "world"]) == 1


def test_build_candidates_from_entity():
    c = build_candidates(NamedEntity(id=7, name="Media - LotR"))
    assert c.entity_id == 7
    assert c.tokens == ("media", "lotr")
    assert c.branches[0] == "mlotr"
    assert c.branches[-1] == "medialotr"
    assert c.min_length == 1

    empty = build_candidates(NamedEntity(id=8, name="!!!"))
    assert empty.branches == ()
