"""
services/bootstrap_service.py
-----------------------------
Loads a small set of sample authors and books on startup.
Running it twice does not duplicate rows.
"""

from models.author import Author, NameId
from models.book import Book
from repositories.author_dao import AuthorDao
from repositories.book_dao import BookDao
from repositories.entity_repo import (
    AUTHOR_COMPOSITE,
    BOOK_NATURAL,
    BOOK_UUID,
    EntityRepository,
)
from repositories.exceptions import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

SAMPLE_BOOKS = [
    # (title, isbn, publisher, author first name, author last name)
    ("Domain Driven Design", "123", "RandomHouse", "Eric", "Evans"),
    ("Spring In Action", "234234", "Oreilly", "Craig", "Walls"),
]


class BootstrapService:
    """Seeds every table with the sample catalogue."""

    def __init__(self):
        self.authors = AuthorDao()
        self.books = BookDao()
        self.uuid_books = EntityRepository(BOOK_UUID)
        self.natural_books = EntityRepository(BOOK_NATURAL)
        self.composite_authors = EntityRepository(AUTHOR_COMPOSITE)

    def run(self) -> dict:
        """
        Insert any sample rows that are missing.

        Returns:
            Dict of table name -> row count after loading.
        """
        for title, isbn, publisher, first_name, last_name in SAMPLE_BOOKS:
            author = self._ensure_author(first_name, last_name)
            self._ensure_book(Book(title=title, isbn=isbn, publisher=publisher, author_id=author.id))

            if not self.natural_books.exists_by_id(title):
                self.natural_books.save_new(Book(title=title, isbn=isbn, publisher=publisher))
            if not self.composite_authors.exists_by_id(NameId(first_name, last_name)):
                self.composite_authors.save_new(Author(first_name=first_name, last_name=last_name))

        if self.uuid_books.count() == 0:
            self.uuid_books.save_all(
                Book(title=title, isbn=isbn, publisher=publisher)
                for title, isbn, publisher, _, _ in SAMPLE_BOOKS
            )

        counts = {
            "author": len(self.authors.find_all()),
            "book": len(self.books.find_all()),
            "book_uuid": self.uuid_books.count(),
            "book_natural": self.natural_books.count(),
            "author_composite": self.composite_authors.count(),
        }
        logger.info(f"Sample data loaded: {counts}")
        return counts

    def _ensure_author(self, first_name: str, last_name: str) -> Author:
        try:
            return self.authors.find_author_by_name(first_name, last_name)
        except NotFoundError:
            return self.authors.save_new_author(Author(first_name=first_name, last_name=last_name))

    def _ensure_book(self, book: Book) -> Book:
        try:
            return self.books.find_by_isbn(book.isbn)
        except NotFoundError:
            return self.books.save_new_book(book)
