from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional, Tuple, Union

@dataclass(frozen=True)
class NamedEntity:
    id: Hashable
    name: str                 # free-form display name, e.g. an album title

@dataclass(frozen=True)
class Candidates:
    entity_id: Hashable
    tokens: Tuple[str, ...]   # normalized word tokens
    branches: Tuple[str, ...] # stage 0 first (most abbreviated)
    min_length: int = 1       # shortener never trims below this

@dataclass
class AssignmentResult:
    bindings: Dict[Hashable, str]                               # id -> keys, input order
    uncovered: Dict[Hashable, str] = field(default_factory=dict) # id -> reason
    rounds: int = 0

    def __len__(self) -> int:
        return len(self.bindings)

@dataclass(frozen=True)
class RuntimeInputState:
    buffer: str = ""
    warning: Optional[str] = None   # last rejected character

# ---- matcher outcomes ----

@dataclass(frozen=True)
class Empty:
    pass

@dataclass(frozen=True)
class Partial:
    buffer: str

@dataclass(frozen=True)
class Matched:
    entity_id: Hashable
    binding: str

@dataclass(frozen=True)
class Rejected:
    char: str
    buffer: str               # unchanged buffer the character was refused against

KeyOutcome = Union[Empty, Partial, Matched, Rejected]
