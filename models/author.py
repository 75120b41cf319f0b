"""
models/author.py
----------------
Domain model for authors, plus the composite name key.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional


class NameId(NamedTuple):
    """Composite key of an author: (first_name, last_name)."""
    first_name: str
    last_name: str


@dataclass
class Author:
    """
    Represents a single author row.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        id: Primary key. None for records not yet persisted.
    """
    first_name: str
    last_name: str
    id: Optional[int] = None

    @property
    def name_id(self) -> NameId:
        return NameId(self.first_name, self.last_name)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"
