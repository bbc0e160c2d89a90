"""Core data types for Tutorials."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Tutorial:
    """A single tutorial record.

    ``id == 0`` means the record has not been saved yet.
    """

    id: int = 0
    title: Optional[str] = None
    description: Optional[str] = None
    published: bool = False
