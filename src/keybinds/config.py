from __future__ import annotations
import os

# Single-character names are padded so the shortener can settle on 1..N repeats
SINGLE_CHAR_REPEAT: int = 10

# /* ~~~ single words at least this long keep a two-letter prefix ~~~ */
LONG_WORD_MIN_LENGTH: int = 7
LONG_WORD_FLOOR: int = 2

# Entity store used when no DSN is given: "memory://" or "sqlite:///path"
DEFAULT_DSN: str = "memory://"

# Web UI
DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000

# Control keys understood by the matcher front ends
BACKSPACE_KEYS = {"Backspace", "\b", "\x7f"}
ESCAPE_KEYS = {"Escape", "Esc", "\x1b"}

# Progress logging (set KEYBINDS_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("KEYBINDS_VERBOSE") == "1"
