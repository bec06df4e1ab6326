"""Command line entry points for relaxavl."""

from .main import app, main

__all__ = ["app", "main"]
