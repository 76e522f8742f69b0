from .api import EntityStore, make_store

__all__ = ["EntityStore", "make_store"]
