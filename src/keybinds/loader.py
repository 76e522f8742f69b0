from __future__ import annotations
import json
import logging
import os
from typing import Any, Iterable, List

from .models import NamedEntity

log = logging.getLogger(__name__)

# keys accepted for the display name, in order of preference
_NAME_KEYS = ("name", "displayName", "albumName")


def _entity_from_obj(obj: Any, position: int) -> NamedEntity:
    if isinstance(obj, str):
        return NamedEntity(id=position, name=obj)
    if not isinstance(obj, dict):
        raise ValueError(f"entry {position}: expected an object or a string, got {type(obj).__name__}")
    for key in _NAME_KEYS:
        if key in obj:
            return NamedEntity(id=obj.get("id", position), name=str(obj[key]))
    raise ValueError(f"entry {position}: missing one of {', '.join(_NAME_KEYS)}")


def entities_from_json(data: Any) -> List[NamedEntity]:
    """
    Accepts:
      - [{"id": ..., "name": ...}, ...]   (also "displayName" / "albumName")
      - ["Name", ...]                     (ids are 1-based positions)
      - {"albums": [...]}                 (either of the above, wrapped)
    """
    if isinstance(data, dict) and "albums" in data:
        data = data["albums"]
    if not isinstance(data, list):
        raise ValueError("expected a JSON list of entities")
    return [_entity_from_obj(obj, i) for i, obj in enumerate(data, start=1)]


def entities_from_lines(lines: Iterable[str]) -> List[NamedEntity]:
    """One name per line; id is the 1-based line number; blank lines skipped."""
    out: List[NamedEntity] = []
    for i, raw in enumerate(lines, start=1):
        name = raw.rstrip("\r\n")
        if name.strip():
            out.append(NamedEntity(id=i, name=name))
    return out


def load_entities(path: str) -> List[NamedEntity]:
    """Read an ordered entity list from a .json file or a plain text file."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.lower().endswith(".json"):
            try:
                entities = entities_from_json(json.load(f))
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}: invalid JSON ({e})") from e
        else:
            entities = entities_from_lines(f)
    log.info("Loaded %d entities from %s", len(entities), path)
    return entities
