import pytest

from keybinds import assign_keybindings, build_assignment
from keybinds.candidates import build_candidates
from keybinds.models import NamedEntity
from keybinds.shorten import is_minimal


@pytest.mark.parametrize("entities, expected", [
    ([(1, "general")], {1: "ge"}),
    ([(1, "Comics"), (2, "Communism"), (3, "Comedians")], {1: "comi", 2: "comm", 3: "come"}),
    ([(1, "Apple"), (2, "Banana")], {1: "a", 2: "b"}),
    ([(1, "J"), (2, "Jazz")], {1: "jj", 2: "ja"}),
    ([(1, "Media - LotR")], {1: "m"}),
])
def test_documented_scenarios(entities, expected):
    assert assign_keybindings(entities) == expected


ALBUMS = [
    "Comics", "Communism", "Comedians", "Apple", "Banana", "J", "Jazz",
    "The World", "Media - LotR", "general", "Summer 2023", "Summer 2024",
    "Cat", "Cat", "!!!", "Cool", "Coolness", "Big Cat", "Bob Cat",
    "Family", "Familiar Faces", "Vacation", "Vacation 2019", "Xmas", "X",
]


def _entities():
    return [NamedEntity(id=i, name=n) for i, n in enumerate(ALBUMS, start=1)]


def test_bindings_are_unique_and_prefix_free():
    keys = list(assign_keybindings(_entities()).values())
    assert len(keys) == len(set(keys))
    for a in keys:
        for b in keys:
            if a != b:
                assert not b.startswith(a), (a, b)


def test_every_entity_is_bound_or_reported():
    result = build_assignment(_entities())
    ids = {e.id for e in _entities()}
    assert set(result.bindings) | set(result.uncovered) == ids
    assert not set(result.bindings) & set(result.uncovered)
    assert result.uncovered == {14: "duplicate-name", 15: "empty-name", 17: "prefix-conflict"}


def test_assignment_is_deterministic():
    first = build_assignment(_entities()).bindings
    second = build_assignment(_entities()).bindings
    assert first == second
    assert list(first.items()) == list(second.items())


def test_assignment_is_minimal():
    entities = _entities()
    floors = {e.id: build_candidates(e).min_length for e in entities}
    assert is_minimal(assign_keybindings(entities), floors)


def test_bindings_are_lowercase_alphanumeric():
    for keys in assign_keybindings(_entities()).values():
        assert keys and keys.isalnum() and keys == keys.lower() and keys.isascii()


def test_bindings_follow_input_order():
    result = build_assignment([(3, "Cat"), (1, "Dog"), (2, "Emu")])
    assert list(result.bindings) == [3, 1, 2]


@pytest.mark.parametrize("entities, expected", [
    ([(1, "Tw"), (2, "The World")], {1: "tw", 2: "th"}),
    ([(1, "The World"), (2, "Tw")], {1: "th", 2: "tw"}),
])
def test_prefix_clash_covers_both_orders(entities, expected):
    result = build_assignment(entities)
    assert result.bindings == expected
    assert result.uncovered == {}


def test_duplicate_ids_raise():
    with pytest.raises(ValueError):
        assign_keybindings([(1, "Cat"), (1, "Dog")])


def test_empty_collection():
    result = build_assignment([])
    assert result.bindings == {} and result.uncovered == {} and result.rounds == 0
