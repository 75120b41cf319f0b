import pytest

from models.author import Author
from models.book import Book
from repositories.exceptions import MappingError, NonUniqueResultError, NotFoundError
from repositories.mappers import row_to_author, row_to_book, single_row

BOOK_ROW = {"id": 1, "title": "T", "isbn": "123", "publisher": "P", "author_id": 3}


def test_row_to_book():
    assert row_to_book(BOOK_ROW) == Book(id=1, title="T", isbn="123", publisher="P", author_id=3)


def test_row_to_book_is_deterministic():
    assert row_to_book(BOOK_ROW) == row_to_book(dict(BOOK_ROW))


def test_row_to_book_missing_column():
    row = {k: v for k, v in BOOK_ROW.items() if k != "author_id"}

    with pytest.raises(MappingError) as exc:
        row_to_book(row)
    assert exc.value.column == "author_id"


def test_row_to_book_keeps_null_values():
    book = row_to_book({**BOOK_ROW, "author_id": None, "publisher": None})

    assert book.author_id is None
    assert book.publisher is None


def test_row_to_author():
    row = {"id": 2, "first_name": "Eric", "last_name": "Evans"}

    assert row_to_author(row) == Author(id=2, first_name="Eric", last_name="Evans")


def test_row_to_author_missing_column():
    with pytest.raises(MappingError, match="last_name"):
        row_to_author({"id": 2, "first_name": "Eric"})


def test_single_row():
    assert single_row([BOOK_ROW], "Book", {"id": 1}) is BOOK_ROW

    with pytest.raises(NotFoundError):
        single_row([], "Book", {"id": 1})
    with pytest.raises(NonUniqueResultError, match="found 2"):
        single_row([BOOK_ROW, BOOK_ROW], "Book", {"title": "T"})
