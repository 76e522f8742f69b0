# keybinds/DB/sqlite_store.py
from __future__ import annotations
import os
import sqlite3
from typing import Hashable, Iterable, List, Optional
from .api import EntityStore
from ..models import NamedEntity

# id has no declared type so ints and strings round-trip unchanged
_SCHEMA = """
CREATE TABLE IF NOT EXISTS entities (
  position INTEGER PRIMARY KEY AUTOINCREMENT,
  id UNIQUE NOT NULL,
  name TEXT NOT NULL
);
"""

class SQLiteStore(EntityStore):
    """CRUD over a single `entities` table; `position` keeps insertion order."""
    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        self.path = db_path
        self.conn: sqlite3.Connection = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.executescript(_SCHEMA)

    # ---- Create ----
    def create(self, e: NamedEntity) -> None:
        self.conn.execute(
            "INSERT INTO entities(id, name) VALUES (?,?) "
            "ON CONFLICT(id) DO UPDATE SET name=excluded.name",
            (e.id, e.name),
        )
        self.conn.commit()

    def bulk_create(self, items: Iterable[NamedEntity]) -> int:
        rows = [(e.id, e.name) for e in items]
        self.conn.executemany(
            "INSERT INTO entities(id, name) VALUES (?,?) "
            "ON CONFLICT(id) DO UPDATE SET name=excluded.name",
            rows,
        )
        self.conn.commit()
        return len(rows)

    # ---- Read ----
    def read(self, eid: Hashable) -> NamedEntity:
        row = self.conn.execute("SELECT id, name FROM entities WHERE id=?", (eid,)).fetchone()
        if row is None:
            raise KeyError(eid)
        return NamedEntity(id=row[0], name=row[1])

    def read_all(self) -> List[NamedEntity]:
        cur = self.conn.execute("SELECT id, name FROM entities ORDER BY position")
        return [NamedEntity(id=i, name=n) for i, n in cur]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM entities").fetchone()[0]

    # ---- Update ----
    def update(self, eid: Hashable, *, name: Optional[str] = None) -> None:
        if name is None:
            return
        cur = self.conn.execute("UPDATE entities SET name=? WHERE id=?", (name, eid))
        self.conn.commit()
        if cur.rowcount == 0:
            raise KeyError(eid)

    # ---- Delete ----
    def delete(self, eid: Hashable) -> None:
        self.conn.execute("DELETE FROM entities WHERE id=?", (eid,))
        self.conn.commit()

    # ---- lifecycle ----
    def close(self) -> None:
        self.conn.close()
