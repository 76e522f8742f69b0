# keybinds/engine.py
from __future__ import annotations

import logging
from typing import Dict, Hashable, Iterable, List, Optional

from . import config as CFG
from .assign import EntityLike, as_entities, build_assignment
from .loader import load_entities
from .matcher import BindingIndex, KeybindingSession
from .models import AssignmentResult, NamedEntity
from .DB.api import EntityStore, make_store

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - entity storage (CRUD) via an EntityStore (SQLite or in-memory),
      - the assignment pipeline (assign.build_assignment),
      - runtime selection sessions (matcher.KeybindingSession).

    Public API (used by CLI/Flask):
      * build(entities, ...): ingest -> store -> assign
      * load(db_dsn=...):     open an existing store -> assign
      * add/rename/remove:    mutate the collection, recompute the assignment
      * keybindings():        id -> keys
      * session():            fresh matcher for one selection attempt
      * shutdown():           close underlying resources

    The assignment is always recomputed wholesale and swapped in; it is
    never persisted.
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.result: Optional[AssignmentResult] = None
        self._store: Optional[EntityStore] = None
        self._index: Optional[BindingIndex] = None

    # /* ~~~ Ingest entities into a store and compute the first assignment ~~~ */
    def build(
        self,
        entities: Optional[Iterable[EntityLike]] = None,
        *,
        source: Optional[str] = None,          # .json or .txt file with entity names
        db_dsn: Optional[str] = None,          # e.g., "sqlite:///./albums.sqlite" or "memory://"
        verbose: bool = False,
    ) -> None:
        if verbose or CFG.VERBOSE:
            logging.basicConfig(level=logging.INFO)

        if entities is None and not source:
            raise ValueError("build(): entities or a source file is required")
        items: List[NamedEntity] = as_entities(entities or [])
        if source:
            items.extend(load_entities(source))
        ids = [e.id for e in items]
        if len(set(ids)) != len(ids):
            raise ValueError("build(): entity ids must be unique")

        dsn = db_dsn or CFG.DEFAULT_DSN
        log.info("Initializing entity store: %s", dsn)
        store = make_store(dsn)
        if store.count():
            log.info("Replacing %d stored entities", store.count())
            for e in store.read_all():
                store.delete(e.id)
        store.bulk_create(items)

        self._close_store()
        self._store = store
        self.refresh()
        log.info("Engine build() complete: entities=%d bound=%d", store.count(), len(self.result or []))

    # /* ~~~ Attach to an already-populated store ~~~ */
    def load(self, *, db_dsn: str, verbose: bool = False) -> None:
        if verbose or CFG.VERBOSE:
            logging.basicConfig(level=logging.INFO)
        log.info("Opening entity store: %s", db_dsn)
        store = make_store(db_dsn)
        self._close_store()
        self._store = store
        self.refresh()
        log.info("Engine load() complete: entities=%d bound=%d", store.count(), len(self.result or []))

    # ------------- collection changes -------------

    def refresh(self) -> AssignmentResult:
        """Recompute the whole assignment from the current entity list."""
        store = self._require_store()
        result = build_assignment(store.read_all())
        # swap in only once complete
        self.result, self._index = result, BindingIndex(result.bindings)
        return result

    def add(self, entity: EntityLike) -> AssignmentResult:
        (e,) = as_entities([entity])
        store = self._require_store()
        try:
            store.read(e.id)
        except KeyError:
            store.create(e)
        else:
            raise ValueError(f"duplicate entity id: {e.id!r}")
        return self.refresh()

    def rename(self, eid: Hashable, name: str) -> AssignmentResult:
        self._require_store().update(eid, name=name)
        return self.refresh()

    def remove(self, eid: Hashable) -> AssignmentResult:
        store = self._require_store()
        store.read(eid)                     # KeyError for unknown ids
        store.delete(eid)
        return self.refresh()

    # ------------- query -------------

    def entities(self) -> List[NamedEntity]:
        return self._require_store().read_all()

    def keybindings(self) -> Dict[Hashable, str]:
        return dict(self._require_result().bindings)

    def keybinding(self, eid: Hashable) -> Optional[str]:
        return self._require_result().bindings.get(eid)

    def uncovered(self) -> Dict[Hashable, str]:
        return dict(self._require_result().uncovered)

    # /* ~~~ A new matcher per selection attempt; never shared across attempts ~~~ */
    def session(self) -> KeybindingSession:
        result = self._require_result()
        return KeybindingSession(result.bindings, index=self._index)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            self._close_store()
        finally:
            self.result = None
            self._index = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _close_store(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def _require_store(self) -> EntityStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self._store

    def _require_result(self) -> AssignmentResult:
        if self.result is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self.result
