from __future__ import annotations
import bisect
import logging
from typing import Dict, Hashable, Iterator, List, Mapping, Optional, Tuple

from . import config as CFG
from .models import Empty, KeyOutcome, Matched, Partial, Rejected, RuntimeInputState

log = logging.getLogger(__name__)


class BindingIndex:
    """
    Sorted view over an assignment for prefix lookups.
    /* ~~~ keys sorted once; every binding extending a prefix sits in one
       contiguous bisect range ~~~ */
    """
    def __init__(self, bindings: Mapping[Hashable, str]) -> None:
        self._owner: Dict[str, Hashable] = {b: eid for eid, b in bindings.items()}
        self._keys: List[str] = sorted(self._owner)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, seq: str) -> bool:
        i = bisect.bisect_left(self._keys, seq)
        return i < len(self._keys) and self._keys[i] == seq

    def owner(self, seq: str) -> Hashable:
        return self._owner[seq]

    def extensions(self, prefix: str) -> Iterator[Tuple[Hashable, str]]:
        """Yield (id, binding) for every binding starting with prefix, in key order."""
        i = bisect.bisect_left(self._keys, prefix)
        while i < len(self._keys) and self._keys[i].startswith(prefix):
            key = self._keys[i]
            yield self._owner[key], key
            i += 1

    def is_strict_prefix(self, seq: str) -> bool:
        return any(b != seq for _, b in self.extensions(seq))

    def next_keys(self, prefix: str) -> List[str]:
        """Characters that continue prefix towards some binding."""
        return sorted({b[len(prefix)] for _, b in self.extensions(prefix) if len(b) > len(prefix)})


# ---------- pure transitions ----------

def press(state: RuntimeInputState, key: str, index: BindingIndex) -> Tuple[RuntimeInputState, KeyOutcome]:
    """
    Feed one typed character.
      buffer + c is a binding        -> Matched, state resets
      buffer + c extends to bindings -> Partial, warning cleared
      otherwise                      -> Rejected, buffer kept, warning = c
    """
    c = key.casefold() if len(key) == 1 else key
    if len(c) == 1:
        candidate = state.buffer + c
        if candidate in index:
            return RuntimeInputState(), Matched(entity_id=index.owner(candidate), binding=candidate)
        if index.is_strict_prefix(candidate):
            return RuntimeInputState(buffer=candidate), Partial(buffer=candidate)
    return RuntimeInputState(buffer=state.buffer, warning=key), Rejected(char=key, buffer=state.buffer)


def backspace(state: RuntimeInputState) -> Tuple[RuntimeInputState, KeyOutcome]:
    buf = state.buffer[:-1]
    if not buf:
        return RuntimeInputState(), Empty()
    return RuntimeInputState(buffer=buf), Partial(buffer=buf)


def cancel(state: RuntimeInputState) -> Tuple[RuntimeInputState, KeyOutcome]:
    return RuntimeInputState(), Empty()


# ---------- session ----------

class KeybindingSession:
    """
    One selection attempt: holds the live RuntimeInputState and routes
    characters and control keys through the pure transitions above.
    """

    def __init__(self, bindings: Mapping[Hashable, str], *, index: Optional[BindingIndex] = None) -> None:
        self.index = index if index is not None else BindingIndex(bindings)
        self.state = RuntimeInputState()

    @classmethod
    def resume(cls, bindings: Mapping[Hashable, str], buffer: str) -> "KeybindingSession":
        """Rebuild a session from a caller-held buffer."""
        session = cls(bindings)
        if buffer:
            if not session.index.is_strict_prefix(buffer):
                raise ValueError(f"not a partial keybinding: {buffer!r}")
            session.state = RuntimeInputState(buffer=buffer)
        return session

    @property
    def buffer(self) -> str:
        return self.state.buffer

    @property
    def warning(self) -> Optional[str]:
        return self.state.warning

    def press(self, key: str) -> KeyOutcome:
        if key in CFG.BACKSPACE_KEYS:
            return self.backspace()
        if key in CFG.ESCAPE_KEYS:
            return self.cancel()
        self.state, outcome = press(self.state, key, self.index)
        if isinstance(outcome, Rejected):
            log.debug("rejected %r after %r", key, outcome.buffer)
        return outcome

    def type_keys(self, keys: str) -> List[KeyOutcome]:
        """Press every character of keys in turn."""
        return [self.press(ch) for ch in keys]

    def backspace(self) -> KeyOutcome:
        self.state, outcome = backspace(self.state)
        return outcome

    def cancel(self) -> KeyOutcome:
        self.state, outcome = cancel(self.state)
        return outcome

    def reset(self) -> None:
        self.state = RuntimeInputState()

    def clear_warning(self) -> None:
        self.state = RuntimeInputState(buffer=self.state.buffer)

    def next_keys(self) -> List[str]:
        return self.index.next_keys(self.state.buffer)

    def candidates(self) -> List[Tuple[Hashable, str]]:
        """(id, binding) pairs still reachable from the current buffer."""
        return list(self.index.extensions(self.state.buffer))
