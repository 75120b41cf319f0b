"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Authors with a database-generated numeric id
CREATE TABLE IF NOT EXISTS author (
    id              BIGSERIAL PRIMARY KEY,
    first_name      VARCHAR(255),
    last_name       VARCHAR(255)
);

-- Books with a database-generated numeric id
CREATE TABLE IF NOT EXISTS book (
    id              BIGSERIAL PRIMARY KEY,
    isbn            VARCHAR(255),
    publisher       VARCHAR(255),
    title           VARCHAR(255),
    author_id       BIGINT REFERENCES author(id)
);

-- Books keyed by a client-generated UUID
CREATE TABLE IF NOT EXISTS book_uuid (
    id              UUID PRIMARY KEY,
    title           VARCHAR(255),
    isbn            VARCHAR(255),
    publisher       VARCHAR(255)
);

-- Books keyed by their title (natural key)
CREATE TABLE IF NOT EXISTS book_natural (
    title           VARCHAR(255) PRIMARY KEY,
    isbn            VARCHAR(255),
    publisher       VARCHAR(255)
);

-- Authors keyed by (first_name, last_name)
CREATE TABLE IF NOT EXISTS author_composite (
    first_name      VARCHAR(255) NOT NULL,
    last_name       VARCHAR(255) NOT NULL,
    PRIMARY KEY (first_name, last_name)
);

CREATE INDEX IF NOT EXISTS idx_book_title ON book(title);
CREATE INDEX IF NOT EXISTS idx_book_isbn ON book(isbn);
CREATE INDEX IF NOT EXISTS idx_author_name ON author(last_name, first_name);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    logger.info("Schema ready.")
