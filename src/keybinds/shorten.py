from __future__ import annotations
import logging
from typing import Dict, Hashable, Iterable, Mapping, Optional

log = logging.getLogger(__name__)


def _clashes(prefix: str, others: Iterable[str]) -> bool:
    """Equal to, a prefix of, or prefixed by any other binding."""
    return any(o.startswith(prefix) or prefix.startswith(o) for o in others)


def shortest_prefix(key: Hashable, bindings: Mapping[Hashable, str], floor: int = 1) -> str:
    """
    Shortest prefix of bindings[key] (not below `floor`) that stays unique and
    prefix-free against every other binding. Returns the binding itself if
    nothing shorter works.
    """
    mine = bindings[key]
    others = [b for k, b in bindings.items() if k != key]
    for n in range(max(1, min(floor, len(mine))), len(mine)):
        if not _clashes(mine[:n], others):
            return mine[:n]
    return mine


def shorten(bindings: Mapping[Hashable, str], floors: Optional[Mapping[Hashable, int]] = None) -> Dict[Hashable, str]:
    """
    Trim every binding to its shortest valid prefix.

    Each pass visits the bindings longest first (ties keep input order) and
    replaces each with shortest_prefix() against the current state. Passes
    repeat until one changes nothing. Lengths only ever decrease, so this
    terminates; the input must already satisfy uniqueness and no-prefix.
    """
    floors = floors or {}
    current = dict(bindings)
    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for key in sorted(current, key=lambda k: -len(current[k])):
            shorter = shortest_prefix(key, current, floors.get(key, 1))
            if shorter != current[key]:
                log.debug("pass %d: %r %r -> %r", passes, key, current[key], shorter)
                current[key] = shorter
                changed = True
    log.debug("shortener settled after %d passes", passes)
    return current


def is_minimal(bindings: Mapping[Hashable, str], floors: Optional[Mapping[Hashable, int]] = None) -> bool:
    """True if no binding above its floor can drop its last character."""
    floors = floors or {}
    for key, b in bindings.items():
        if len(b) <= max(1, floors.get(key, 1)):
            continue
        others = [o for k, o in bindings.items() if k != key]
        if not _clashes(b[:-1], others):
            return False
    return True
