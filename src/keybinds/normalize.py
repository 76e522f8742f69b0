from __future__ import annotations
import re
import unicodedata
from typing import List

# Anything outside ASCII letters/digits separates words
_SPLIT = re.compile(r"[^a-z0-9]+")


def _fold(text: str) -> str:
    """Lowercase and strip diacritics: 'Café' -> 'cafe'. Other symbols are left for the splitter."""
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def tokenize_name(raw: str) -> List[str]:
    """
    Split a display name into lowercase alphanumeric word tokens.
      * case-insensitive
      * any run of non-alphanumerics (spaces, hyphens, punctuation) is a word boundary
      * empty tokens are dropped, so a name without letters/digits yields []
    """
    return [tok for tok in _SPLIT.split(_fold(raw)) if tok]


def normalize_name(raw: str) -> str:
    """Convenience: tokens joined by single spaces."""
    return " ".join(tokenize_name(raw))
