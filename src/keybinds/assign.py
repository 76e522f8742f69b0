from __future__ import annotations
import logging
from typing import Hashable, Iterable, List, Tuple, Union

from .allocate import allocate
from .candidates import build_all
from .models import AssignmentResult, NamedEntity
from .shorten import shorten

log = logging.getLogger(__name__)

EntityLike = Union[NamedEntity, Tuple[Hashable, str]]


def as_entities(items: Iterable[EntityLike]) -> List[NamedEntity]:
    """Accept NamedEntity objects or plain (id, name) pairs."""
    out: List[NamedEntity] = []
    for it in items:
        if isinstance(it, NamedEntity):
            out.append(it)
        else:
            eid, name = it
            out.append(NamedEntity(id=eid, name=str(name)))
    return out


def build_assignment(items: Iterable[EntityLike]) -> AssignmentResult:
    """
    Full pipeline: normalize -> candidate branches -> breadth-first allocation
    -> longest-first shortening. Pure and deterministic for a given input order.
    """
    entities = as_entities(items)
    candidates = build_all(entities)
    allocation = allocate(candidates)

    floors = {c.entity_id: c.min_length for c in candidates}
    bindings = shorten(allocation.assigned, floors)

    log.debug("assigned %d/%d keybindings in %d rounds",
              len(bindings), len(entities), allocation.rounds)
    return AssignmentResult(bindings=bindings, uncovered=dict(allocation.uncovered),
                            rounds=allocation.rounds)


def assign_keybindings(items: Iterable[EntityLike]) -> dict:
    """Convenience: return only the id -> keybinding map."""
    return build_assignment(items).bindings
