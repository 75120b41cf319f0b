"""
models/book.py
--------------
Domain model for books.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Book:
    """
    Represents a single book row.

    Attributes:
        title: Book title.
        isbn: ISBN as printed on the book.
        publisher: Publisher name.
        author_id: Foreign key to the author table (optional).
        id: Primary key. None for records not yet persisted. An ``int`` for
            database-generated ids, a ``uuid.UUID`` for UUID-keyed tables.
    """
    title: str
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    author_id: Optional[int] = None
    id: Optional[Any] = None

    def __str__(self) -> str:
        return f"#{self.id} {self.title} ({self.isbn}) - {self.publisher}"
