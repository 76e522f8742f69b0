# keybinds/DB/memory_store.py
from __future__ import annotations
from typing import Dict, Hashable, Iterable, List, Optional
from .api import EntityStore
from ..models import NamedEntity

class MemoryStore(EntityStore):
    """Simple in-memory CRUD (useful for tests or ephemeral runs)."""
    def __init__(self, entities: Optional[Iterable[NamedEntity]] = None) -> None:
        self._rows: Dict[Hashable, NamedEntity] = {}
        if entities:
            self.bulk_create(entities)

    # C
    def create(self, e: NamedEntity) -> None:
        self._rows[e.id] = e

    def bulk_create(self, items: Iterable[NamedEntity]) -> int:
        n = 0
        for e in items:
            self._rows[e.id] = e; n += 1
        return n

    # R
    def read(self, eid: Hashable) -> NamedEntity:
        try:
            return self._rows[eid]
        except KeyError:
            raise KeyError(eid)

    def read_all(self) -> List[NamedEntity]:
        return list(self._rows.values())

    def count(self) -> int:
        return len(self._rows)

    # U
    def update(self, eid: Hashable, *, name: Optional[str] = None) -> None:
        e = self.read(eid)
        # dict keeps the original slot, so renames do not reorder
        self._rows[eid] = NamedEntity(id=e.id, name=name if name is not None else e.name)

    # D
    def delete(self, eid: Hashable) -> None:
        self._rows.pop(eid, None)

    def close(self) -> None:
        self._rows.clear()
