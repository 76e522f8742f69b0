# keybinds/DB/api.py
from __future__ import annotations
from typing import Protocol, Hashable, Iterable, List, Optional

from ..models import NamedEntity


class EntityStore(Protocol):
    # Create
    def create(self, e: NamedEntity) -> None: ...
    def bulk_create(self, items: Iterable[NamedEntity]) -> int: ...
    # Read
    def read(self, eid: Hashable) -> NamedEntity: ...
    def read_all(self) -> List[NamedEntity]: ...      # insertion order
    def count(self) -> int: ...
    # Update
    def update(self, eid: Hashable, *, name: Optional[str] = None) -> None: ...
    # Delete
    def delete(self, eid: Hashable) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str, *, entities: Optional[Iterable[NamedEntity]] = None) -> EntityStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (file created if missing; seeded with entities if empty)
      - memory://      -> MemoryStore (seeded with entities if given)
    """
    if dsn.startswith("sqlite:///"):
        from .sqlite_store import SQLiteStore
        store = SQLiteStore(dsn.removeprefix("sqlite:///"))
        if entities is not None and store.count() == 0:
            store.bulk_create(entities)
        return store

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore(entities=entities)

    raise ValueError(f"Unsupported store DSN: {dsn}")
