"""Flask front end for album keybindings."""
from .web import app, main

__all__ = ["app", "main"]
