from __future__ import annotations
import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

from .models import Candidates

log = logging.getLogger(__name__)


class _Conflict:
    """Ledger marker for a branch proposed by more than one entity in the same round."""
    def __repr__(self) -> str:
        return "CONFLICT"

CONFLICT = _Conflict()

Ledger = Mapping[str, object]   # branch -> owning entity id, or CONFLICT

# coverage failure reasons
EMPTY_NAME = "empty-name"
DUPLICATE_NAME = "duplicate-name"
PREFIX_CONFLICT = "prefix-conflict"
BRANCHES_TAKEN = "branches-taken"


@dataclass(frozen=True)
class Allocation:
    assigned: Dict[Hashable, str]                               # input order
    uncovered: Dict[Hashable, str] = field(default_factory=dict)
    rounds: int = 0
    ledger: Ledger = field(default_factory=lambda: MappingProxyType({}))


def _related(a: str, b: str) -> bool:
    """True if the two bindings are equal or one is a prefix of the other."""
    return a.startswith(b) or b.startswith(a)


def run_round(stage: int, active: Sequence[Candidates], ledger: Ledger) -> Tuple[Dict[Hashable, str], Ledger]:
    """
    One breadth-first round: every active entity proposes its stage-`stage` branch.
      - proposed by exactly one entity and unseen -> assigned
      - proposed by several                    -> discarded (CONFLICT), all advance
      - already in the ledger                  -> proposer advances
    Returns the winners and a new ledger; the input ledger is left untouched.
    """
    proposals: Dict[str, List[Hashable]] = defaultdict(list)
    for cand in active:                      # input order
        if stage < len(cand.branches):
            proposals[cand.branches[stage]].append(cand.entity_id)

    won: Dict[Hashable, str] = {}
    nxt = dict(ledger)
    for branch, owners in proposals.items():
        if branch in ledger:
            log.debug("round %d: %r already %s, advancing %s", stage, branch,
                      "discarded" if ledger[branch] is CONFLICT else "taken", owners)
            continue
        if len(owners) == 1:
            nxt[branch] = owners[0]
            won[owners[0]] = branch
            log.debug("round %d: %r -> %r", stage, branch, owners[0])
        else:
            nxt[branch] = CONFLICT
            log.debug("round %d: %r proposed by %s, discarded", stage, branch, owners)
    return won, MappingProxyType(nxt)


def _check_ids(candidates: Sequence[Candidates]) -> None:
    seen = set()
    for c in candidates:
        if c.entity_id in seen:
            raise ValueError(f"duplicate entity id: {c.entity_id!r}")
        seen.add(c.entity_id)


def _award_duplicates(pending: Sequence[Candidates], assigned: Dict[Hashable, str],
                      ledger: Ledger, uncovered: Dict[Hashable, str]) -> None:
    """
    Identical names: the first unassigned entity in input order takes the
    shared final branch. Anyone else left over is a duplicate only if another
    entity carries the same normalized name; otherwise its branches were all
    taken by differently named entities.
    """
    names = Counter(c.tokens for c in pending)
    claimed = set()
    for c in pending:
        if c.entity_id in assigned:
            continue
        final = c.branches[-1]
        if ledger.get(final) is CONFLICT and final not in claimed:
            claimed.add(final)
            assigned[c.entity_id] = final
            log.debug("tie-break: %r -> %r (first in input order)", final, c.entity_id)
        else:
            uncovered[c.entity_id] = DUPLICATE_NAME if names[c.tokens] > 1 else BRANCHES_TAKEN


def _first_free(cand: Candidates, eid: Hashable, current: Mapping[Hashable, str]) -> Optional[str]:
    """First branch of cand that is prefix-free against every binding except its own."""
    others = [b for o, b in current.items() if o != eid]
    for branch in cand.branches:
        if not any(_related(branch, b) for b in others):
            return branch
    return None


def _move_earlier(by_id: Mapping[Hashable, Candidates], current: Dict[Hashable, str],
                  clashing: Sequence[Hashable]) -> Optional[Dict[Hashable, str]]:
    """Move every clashing entity to a prefix-free branch, or None if one of them cannot move."""
    trial = dict(current)
    for eid in clashing:
        branch = _first_free(by_id[eid], eid, trial)
        if branch is None:
            return None
        log.debug("prefix clash: earlier %r moves %r -> %r", eid, trial[eid], branch)
        trial[eid] = branch
    return trial


def resolve_prefixes(candidates: Sequence[Candidates], assigned: Dict[Hashable, str],
                     uncovered: Dict[Hashable, str]) -> Dict[Hashable, str]:
    """
    Enforce the no-prefix rule the round ledger cannot see. Entities are
    visited in input order; one clashing with earlier bindings re-picks
    its first branch that is prefix-free against every other binding. If it
    has none, the earlier clashing entities move to their own first
    prefix-free branch instead. Only when neither side can move does the
    later entity lose its binding.
    """
    current = dict(assigned)
    by_id = {c.entity_id: c for c in candidates}
    order = list(current)
    for pos, eid in enumerate(order):
        mine = current[eid]
        clashing = [o for o in order[:pos] if o in current and _related(mine, current[o])]
        if not clashing:
            continue
        branch = _first_free(by_id[eid], eid, current)
        if branch is not None:
            log.debug("prefix clash: %r moves %r -> %r", eid, mine, branch)
            current[eid] = branch
            continue
        moved = _move_earlier(by_id, current, clashing)
        if moved is not None:
            current = moved
            continue
        log.info("no prefix-free keybinding for %r (%r)", eid, mine)
        del current[eid]
        uncovered[eid] = PREFIX_CONFLICT
    return current


def allocate(candidates: Sequence[Candidates]) -> Allocation:
    """
    Assign at most one branch per entity so that all assigned branches are
    unique and none is a prefix of another.
    """
    _check_ids(candidates)

    uncovered: Dict[Hashable, str] = {}
    for c in candidates:
        if not c.branches:
            uncovered[c.entity_id] = EMPTY_NAME
    pending = [c for c in candidates if c.branches]

    ledger: Ledger = MappingProxyType({})
    assigned: Dict[Hashable, str] = {}
    rounds = 0
    depth = max((len(c.branches) for c in pending), default=0)
    for stage in range(depth):
        active = [c for c in pending if c.entity_id not in assigned and stage < len(c.branches)]
        if not active:
            break
        rounds += 1
        won, ledger = run_round(stage, active, ledger)
        assigned.update(won)

    _award_duplicates(pending, assigned, ledger, uncovered)

    # restore input order before the order-sensitive prefix pass
    ordered = {c.entity_id: assigned[c.entity_id] for c in pending if c.entity_id in assigned}
    ordered = resolve_prefixes(pending, ordered, uncovered)

    for eid, reason in uncovered.items():
        if reason != EMPTY_NAME:
            log.info("entity %r left without a keybinding: %s", eid, reason)
    return Allocation(assigned=ordered, uncovered=uncovered, rounds=rounds, ledger=ledger)
