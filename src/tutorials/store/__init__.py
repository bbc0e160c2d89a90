"""Storage backends for Tutorials."""

from tutorials.store.base import Store
from tutorials.store.memory import MemoryStore

__all__ = ["Store", "MemoryStore"]
