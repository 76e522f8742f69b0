from __future__ import annotations
from typing import Iterable, List, Sequence

from . import config as CFG
from .models import Candidates, NamedEntity
from .normalize import tokenize_name


def generate_branches(tokens: Sequence[str]) -> List[str]:
    """
    /* ~~~ Ordered candidate keybindings for one name, most abbreviated first ~~~ */

      ["j"]              -> ["jjjjjjjjjj"]
      ["cool"]           -> ["cool"]
      ["the", "world"]   -> ["tworld", "thworld", "theworld"]

    The first word grows one letter per stage, middle words contribute
    their initials and the last word is spelled out. The final stage is
    always the full concatenation of every token.
    """
    toks = [t for t in tokens if t]
    if not toks:
        return []

    if len(toks) == 1:
        word = toks[0]
        if len(word) == 1:
            return [word * CFG.SINGLE_CHAR_REPEAT]
        # the shortener abbreviates single words by trimming to a prefix
        return [word]

    first, last = toks[0], toks[-1]
    middle = "".join(t[0] for t in toks[1:-1])

    branches: List[str] = []
    for i in range(1, len(first) + 1):
        branches.append(first[:i] + middle + last)

    full = "".join(toks)
    if branches[-1] != full:
        branches.append(full)
    return branches


def min_length(tokens: Sequence[str]) -> int:
    """Shortest binding the shortener may settle on (two-letter prefix for long single words)."""
    if len(tokens) == 1 and len(tokens[0]) >= CFG.LONG_WORD_MIN_LENGTH:
        return CFG.LONG_WORD_FLOOR
    return 1


def build_candidates(entity: NamedEntity) -> Candidates:
    tokens = tuple(tokenize_name(entity.name))
    return Candidates(
        entity_id=entity.id,
        tokens=tokens,
        branches=tuple(generate_branches(tokens)),
        min_length=min_length(tokens),
    )


def build_all(entities: Iterable[NamedEntity]) -> List[Candidates]:
    return [build_candidates(e) for e in entities]
