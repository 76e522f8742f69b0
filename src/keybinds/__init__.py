"""
Album Keybindings

Assigns every item of a named collection (photo albums, for instance) a
short, unique, typeable keyboard shortcut and matches a live stream of
keystrokes against those shortcuts.

The module is designed with a clean separation of concerns:
- Name normalization and candidate generation
- Breadth-first allocation and longest-first shortening
- A per-session matcher for typed input
- Entity storage and the Engine that recomputes assignments on change

Main Functions:
    assign_keybindings(entities): id -> keybinding map for an ordered entity list
    KeybindingSession(bindings): matcher for one selection attempt

Example Usage:
    from keybinds import assign_keybindings, KeybindingSession

    keys = assign_keybindings([(1, "Comics"), (2, "Communism"), (3, "Comedians")])
    # {1: 'comi', 2: 'comm', 3: 'come'}

    session = KeybindingSession(keys)
    for ch in "comm":
        outcome = session.press(ch)
    # Matched(entity_id=2, binding='comm')
"""

# src/keybinds/__init__.py
from .assign import assign_keybindings, build_assignment  # re-export
from .engine import Engine
from .matcher import KeybindingSession
from .models import (
    AssignmentResult, Empty, KeyOutcome, Matched, NamedEntity, Partial, Rejected,
    RuntimeInputState,
)

__version__ = "1.0.0"
__all__ = [
    "assign_keybindings", "build_assignment", "Engine", "KeybindingSession",
    "AssignmentResult", "NamedEntity", "RuntimeInputState", "KeyOutcome",
    "Empty", "Partial", "Matched", "Rejected",
]
