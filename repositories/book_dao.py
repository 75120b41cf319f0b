"""
repositories/book_dao.py
------------------------
Data access layer for books.
All SQL queries related to the `book` table live here.
"""

from models.book import Book
from db.connection import ROW_CURSOR, get_connection, release_connection
from repositories.mappers import row_to_book, single_row
from utils.logger import get_logger

logger = get_logger(__name__)


class BookDao:
    """DAO for CRUD operations on the book table."""

    # ── READ ──────────────────────────────────────────────

    def find_all(self) -> list[Book]:
        """Return every book, ordered by id. Empty list if there are none."""
        sql = "SELECT * FROM book ORDER BY id;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql)
                return [row_to_book(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, book_id: int) -> Book:
        """
        Fetch a single book by primary key.

        Raises:
            NotFoundError: If no row has that id.
        """
        return self._find_one("SELECT * FROM book WHERE id = %s;", {"id": book_id})

    def find_book_by_title(self, title: str) -> Book:
        """
        Fetch the one book with exactly this title.

        Raises:
            NotFoundError: If no book has that title.
            NonUniqueResultError: If several books share it.
        """
        return self._find_one("SELECT * FROM book WHERE title = %s;", {"title": title})

    def find_by_isbn(self, isbn: str) -> Book:
        """
        Fetch the one book with exactly this ISBN.

        Raises:
            NotFoundError: If no book has that ISBN.
            NonUniqueResultError: If several books share it.
        """
        return self._find_one("SELECT * FROM book WHERE isbn = %s;", {"isbn": isbn})

    # ── CREATE ────────────────────────────────────────────

    def save_new_book(self, book: Book) -> Book:
        """
        Insert a new book and read it back.

        Any id set on ``book`` is ignored; the database assigns one.

        Args:
            book: The Book to persist.

        Returns:
            A new Book as stored, including the generated id.
        """
        sql = """
            INSERT INTO book (isbn, publisher, title, author_id)
            VALUES (%s, %s, %s, %s)
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql, (book.isbn, book.publisher, book.title, book.author_id))
                book_id = cur.fetchone()["id"]
            conn.commit()
            logger.info(f"Saved book #{book_id} '{book.title}'")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to save book '{book.title}': {e}")
            raise
        finally:
            release_connection(conn)
        return self.get_by_id(book_id)

    # ── UPDATE ────────────────────────────────────────────

    def update_book(self, book: Book) -> Book:
        """
        Overwrite every mutable column of the row identified by ``book.id``.

        Last write wins; there is no version check.

        Returns:
            The Book as stored after the update.

        Raises:
            NotFoundError: If no row has ``book.id``.
        """
        sql = """
            UPDATE book
            SET isbn = %s, publisher = %s, title = %s, author_id = %s
            WHERE id = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    book.isbn, book.publisher, book.title, book.author_id, book.id,
                ))
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update book #{book.id}: {e}")
            raise
        finally:
            release_connection(conn)
        return self.get_by_id(book.id)

    # ── DELETE ────────────────────────────────────────────

    def delete_book_by_id(self, book_id: int) -> None:
        """Delete a book by id. Deleting a missing id is not an error."""
        sql = "DELETE FROM book WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (book_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted book #{book_id}")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete book #{book_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _find_one(sql: str, criteria: dict) -> Book:
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql, tuple(criteria.values()))
                rows = cur.fetchall()
        finally:
            release_connection(conn)
        return row_to_book(single_row(rows, "Book", criteria))
