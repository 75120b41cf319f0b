"""
repositories/author_dao.py
--------------------------
Data access layer for authors.
All SQL queries related to the `author` table live here.
"""

from models.author import Author
from db.connection import ROW_CURSOR, get_connection, release_connection
from repositories.mappers import row_to_author, single_row
from utils.logger import get_logger

logger = get_logger(__name__)


class AuthorDao:
    """DAO for CRUD operations on the author table."""

    # ── READ ──────────────────────────────────────────────

    def find_all(self) -> list[Author]:
        """Return every author, ordered by id."""
        sql = "SELECT * FROM author ORDER BY id;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql)
                return [row_to_author(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, author_id: int) -> Author:
        """
        Fetch a single author by primary key.

        Raises:
            NotFoundError: If no row has that id.
        """
        sql = "SELECT * FROM author WHERE id = %s;"
        criteria = {"id": author_id}
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql, (author_id,))
                rows = cur.fetchall()
        finally:
            release_connection(conn)
        return row_to_author(single_row(rows, "Author", criteria))

    def find_author_by_name(self, first_name: str, last_name: str) -> Author:
        """
        Fetch the one author matching both names exactly.

        Raises:
            NotFoundError: If nobody has that name.
            NonUniqueResultError: If several authors share it.
        """
        sql = "SELECT * FROM author WHERE first_name = %s AND last_name = %s;"
        criteria = {"first_name": first_name, "last_name": last_name}
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql, (first_name, last_name))
                rows = cur.fetchall()
        finally:
            release_connection(conn)
        return row_to_author(single_row(rows, "Author", criteria))

    # ── CREATE ────────────────────────────────────────────

    def save_new_author(self, author: Author) -> Author:
        """
        Insert a new author and read it back with its generated id.
        Any id set on ``author`` is ignored.
        """
        sql = """
            INSERT INTO author (first_name, last_name)
            VALUES (%s, %s)
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql, (author.first_name, author.last_name))
                author_id = cur.fetchone()["id"]
            conn.commit()
            logger.info(f"Saved author #{author_id} '{author}'")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to save author '{author}': {e}")
            raise
        finally:
            release_connection(conn)
        return self.get_by_id(author_id)

    # ── UPDATE ────────────────────────────────────────────

    def update_author(self, author: Author) -> Author:
        """Overwrite both name columns of ``author.id`` and return the stored row."""
        sql = "UPDATE author SET first_name = %s, last_name = %s WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (author.first_name, author.last_name, author.id))
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update author #{author.id}: {e}")
            raise
        finally:
            release_connection(conn)
        return self.get_by_id(author.id)

    # ── DELETE ────────────────────────────────────────────

    def delete_author_by_id(self, author_id: int) -> None:
        """Delete an author by id. Deleting a missing id is not an error."""
        sql = "DELETE FROM author WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (author_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted author #{author_id}")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete author #{author_id}: {e}")
            raise
        finally:
            release_connection(conn)
