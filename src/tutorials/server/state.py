"""Process-wide tutorial store used by the route handlers."""

from __future__ import annotations

import logging
from typing import Optional

from tutorials.store.base import Store
from tutorials.store.memory import MemoryStore

logger = logging.getLogger(__name__)

# Global store instance
_store: Optional[Store] = None


def get_store() -> Store:
    """Return the global store, creating an empty one on first use.

    Also used as a FastAPI dependency.
    """
    global _store
    if _store is None:
        _store = MemoryStore()
        logger.info("In-memory tutorial store created")
    return _store


def set_store(store: Optional[Store]) -> None:
    """Replace the global store. Passing None resets it to a fresh one on next use."""
    global _store
    _store = store
