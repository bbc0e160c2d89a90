"""Tutorials — in-memory tutorial catalogue with a REST API."""

from tutorials.exceptions import TutorialNotFoundError
from tutorials.store import MemoryStore, Store
from tutorials.types import Tutorial

__all__ = ["Tutorial", "Store", "MemoryStore", "TutorialNotFoundError"]
