"""Abstract store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from tutorials.types import Tutorial


class Store(ABC):
    """Abstract base class for tutorial storage backends."""

    @abstractmethod
    def find_all(self) -> List[Tutorial]:
        """Return every tutorial in insertion order."""

    @abstractmethod
    def find_by_title_contains(self, substring: str) -> List[Tutorial]:
        """Return tutorials whose title contains ``substring`` (case-sensitive)."""

    @abstractmethod
    def find_by_id(self, tutorial_id: int) -> Optional[Tutorial]:
        """Get a tutorial by ID, or None if not found."""

    @abstractmethod
    def find_by_published(self, published: bool) -> List[Tutorial]:
        """Return tutorials whose published flag equals ``published``."""

    @abstractmethod
    def save(self, tutorial: Tutorial) -> Tutorial:
        """Insert a new tutorial (id 0) or replace an existing one."""

    @abstractmethod
    def delete_by_id(self, tutorial_id: int) -> bool:
        """Delete a tutorial by ID. Returns True if it existed."""

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every tutorial. Issued IDs are never reused."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored tutorials."""
