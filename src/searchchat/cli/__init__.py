"""Command-line interface for searchchat."""

from .app import app, main

__all__ = ["app", "main"]
