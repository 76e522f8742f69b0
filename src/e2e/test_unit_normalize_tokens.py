import pytest

from keybinds.normalize import normalize_name, tokenize_name


@pytest.mark.parametrize("raw, tokens", [
    ("The World", ["the", "world"]),
    ("Media - LotR", ["media", "lotr"]),
    ("  Summer 2023!! ", ["summer", "2023"]),
    ("rock'n'roll", ["rock", "n", "roll"]),
    ("Café Racer", ["cafe", "racer"]),
    ("J", ["j"]),
])
def test_tokenize_splits_on_non_alphanumerics(raw, tokens):
    assert tokenize_name(raw) == tokens


def test_names_without_alphanumerics_yield_nothing():
    assert tokenize_name("!!! --- ???") == []
    assert tokenize_name("") == []
    assert normalize_name("...") == ""


def test_normalize_collapses_separators():
    assert normalize_name("Hello,   WORLD -- again") == "hello world again"


def test_non_ascii_symbols_act_as_separators():
    # diacritics fold, other scripts do not survive the alphanumeric filter
    assert tokenize_name("naïve→plan") == ["naive", "plan"]
