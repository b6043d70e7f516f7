"""Command-line entry points."""

from .manage import main

__all__ = ["main"]
