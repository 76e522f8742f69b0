from pathlib import Path
import pytest
from keybinds.engine import Engine
from keybinds.DB.api import make_store
from keybinds.DB.memory_store import MemoryStore
from keybinds.models import NamedEntity

@pytest.mark.e2e
def test_build_persist_reload(tmp_path: Path):
    dsn = f"sqlite:///{tmp_path / 'albums.sqlite'}"
    eng = Engine()
    eng.build([(3, "Jazz"), (1, "J"), ("x", "Apple")], db_dsn=dsn)
    first = eng.keybindings()
    eng.rename("x", "Banana")
    eng.shutdown()

    eng = Engine()
    try:
        eng.load(db_dsn=dsn)
        assert [e.id for e in eng.entities()] == [3, 1, "x"]
        assert eng.keybindings() == {3: "ja", 1: "jj", "x": "b"}
        assert first == {3: "ja", 1: "jj", "x": "a"}
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_sqlite_store_crud(tmp_path: Path):
    store = make_store(f"sqlite:///{tmp_path / 'db' / 's.sqlite'}",
                       entities=[NamedEntity(1, "Cat"), NamedEntity("two", "Dog")])
    try:
        assert store.count() == 2
        assert store.read("two") == NamedEntity("two", "Dog")
        store.create(NamedEntity(3, "Emu"))
        store.update(1, name="Lion")
        store.delete("two")
        assert store.read_all() == [NamedEntity(1, "Lion"), NamedEntity(3, "Emu")]
        with pytest.raises(KeyError):
            store.read("two")
        with pytest.raises(KeyError):
            store.update("two", name="Dog")
    finally:
        store.close()

def test_memory_store_keeps_order_on_rename():
    store = MemoryStore([NamedEntity(1, "a"), NamedEntity(2, "b")])
    store.update(1, name="z")
    assert [e.name for e in store.read_all()] == ["z", "b"]
    with pytest.raises(KeyError):
        store.read(5)

def test_unknown_dsn():
    with pytest.raises(ValueError):
        make_store("postgres://nowhere")
