"""
repositories/mappers.py
-----------------------
Row mappers: turn one result row (a ``{column: value}`` mapping, as produced
by ``RealDictCursor``) into a domain object.

Every expected column must be present; a missing column raises
``MappingError`` instead of defaulting the field.
"""

from typing import Any, Mapping, Sequence

from models.author import Author
from models.book import Book
from repositories.exceptions import MappingError, NonUniqueResultError, NotFoundError


def _column(row: Mapping[str, Any], column: str, entity: str) -> Any:
    try:
        return row[column]
    except KeyError:
        raise MappingError(entity, column) from None


def row_to_book(row: Mapping[str, Any]) -> Book:
    """Map a ``book`` row to a Book."""
    return Book(
        id=_column(row, "id", "Book"),
        title=_column(row, "title", "Book"),
        isbn=_column(row, "isbn", "Book"),
        publisher=_column(row, "publisher", "Book"),
        author_id=_column(row, "author_id", "Book"),
    )


def row_to_uuid_book(row: Mapping[str, Any]) -> Book:
    """Map a ``book_uuid`` row (no author column) to a Book."""
    return Book(
        id=_column(row, "id", "Book"),
        title=_column(row, "title", "Book"),
        isbn=_column(row, "isbn", "Book"),
        publisher=_column(row, "publisher", "Book"),
    )


def row_to_natural_book(row: Mapping[str, Any]) -> Book:
    """Map a ``book_natural`` row (keyed by title) to a Book."""
    return Book(
        title=_column(row, "title", "Book"),
        isbn=_column(row, "isbn", "Book"),
        publisher=_column(row, "publisher", "Book"),
    )


def row_to_author(row: Mapping[str, Any]) -> Author:
    """Map an ``author`` row to an Author."""
    return Author(
        id=_column(row, "id", "Author"),
        first_name=_column(row, "first_name", "Author"),
        last_name=_column(row, "last_name", "Author"),
    )


def row_to_composite_author(row: Mapping[str, Any]) -> Author:
    """Map an ``author_composite`` row (keyed by name) to an Author."""
    return Author(
        first_name=_column(row, "first_name", "Author"),
        last_name=_column(row, "last_name", "Author"),
    )


def single_row(rows: Sequence[Mapping[str, Any]], entity: str, criteria: dict) -> Mapping[str, Any]:
    """
    Return the only row of a find-exactly-one query.

    Raises:
        NotFoundError: No row matched.
        NonUniqueResultError: More than one row matched.
    """
    if not rows:
        raise NotFoundError(entity, criteria)
    if len(rows) > 1:
        raise NonUniqueResultError(entity, criteria, len(rows))
    return rows[0]
