"""In-memory store implementation."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from tutorials.store.base import Store
from tutorials.types import Tutorial

logger = logging.getLogger(__name__)


class MemoryStore(Store):
    """Thread-safe in-memory store backed by a dict keyed by tutorial ID.

    Dict order is insertion order, and replacing the value of an existing key
    keeps its position, so enumeration order survives updates. Records are
    copied on the way in and out; the only way to change stored state is
    through :meth:`save` and the delete methods.
    """

    def __init__(self) -> None:
        self._tutorials: Dict[int, Tutorial] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def find_all(self) -> List[Tutorial]:
        with self._lock:
            return [replace(t) for t in self._tutorials.values()]

    def find_by_title_contains(self, substring: str) -> List[Tutorial]:
        with self._lock:
            return [
                replace(t)
                for t in self._tutorials.values()
                if t.title is not None and substring in t.title
            ]

    def find_by_id(self, tutorial_id: int) -> Optional[Tutorial]:
        with self._lock:
            tutorial = self._tutorials.get(tutorial_id)
            return replace(tutorial) if tutorial is not None else None

    def find_by_published(self, published: bool) -> List[Tutorial]:
        with self._lock:
            return [
                replace(t)
                for t in self._tutorials.values()
                if t.published == published
            ]

    def save(self, tutorial: Tutorial) -> Tutorial:
        with self._lock:
            if tutorial.id != 0:
                if tutorial.id in self._tutorials:
                    self._tutorials[tutorial.id] = replace(tutorial)
                else:
                    # Unknown ID: nothing is stored, the input is echoed back.
                    logger.warning(
                        "Ignoring save for unknown tutorial id %d",
                        tutorial.id,
                        extra={"tutorial_id": tutorial.id},
                    )
                return tutorial

            self._last_id += 1
            saved = replace(tutorial, id=self._last_id)
            self._tutorials[saved.id] = replace(saved)
            logger.debug("Assigned tutorial id %d", saved.id, extra={"tutorial_id": saved.id})
            return saved

    def delete_by_id(self, tutorial_id: int) -> bool:
        with self._lock:
            return self._tutorials.pop(tutorial_id, None) is not None

    def delete_all(self) -> None:
        with self._lock:
            self._tutorials.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._tutorials)
