import sqlite3
import uuid

import pytest

import db.connection as connection
from models.author import Author
from repositories.author_dao import AuthorDao

# SQLite equivalent of db/init_db.py's schema.
SCHEMA = """
CREATE TABLE author (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name  TEXT,
    last_name   TEXT
);
CREATE TABLE book (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    isbn        TEXT,
    publisher   TEXT,
    title       TEXT,
    author_id   INTEGER REFERENCES author(id)
);
CREATE TABLE book_uuid (
    id          UUID PRIMARY KEY,
    title       TEXT,
    isbn        TEXT,
    publisher   TEXT
);
CREATE TABLE book_natural (
    title       TEXT PRIMARY KEY,
    isbn        TEXT,
    publisher   TEXT
);
CREATE TABLE author_composite (
    first_name  TEXT NOT NULL,
    last_name   TEXT NOT NULL,
    PRIMARY KEY (first_name, last_name)
);
"""

sqlite3.register_adapter(uuid.UUID, str)
sqlite3.register_converter("UUID", lambda raw: uuid.UUID(raw.decode()))


class SqliteCursor:
    """Cursor that accepts psycopg2's %s placeholders and works as a context manager."""

    def __init__(self, cur, dict_rows):
        self._cur = cur
        self._dict_rows = dict_rows

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._cur.close()

    @property
    def rowcount(self):
        return self._cur.rowcount

    def execute(self, sql, params=()):
        self._cur.execute(sql.replace("%s", "?"), tuple(params))

    def fetchone(self):
        row = self._cur.fetchone()
        return None if row is None else self._wrap(row)

    def fetchall(self):
        return [self._wrap(r) for r in self._cur.fetchall()]

    def _wrap(self, row):
        return dict(row) if self._dict_rows else tuple(row)


class SqliteConnection:
    def __init__(self, conn):
        self._conn = conn

    def cursor(self, cursor_factory=None):
        return SqliteCursor(self._conn.cursor(), dict_rows=cursor_factory is not None)

    def commit(self):
        self._conn.commit()

    def rollback(self):
        self._conn.rollback()

    def execute(self, sql, params=()):
        return self._conn.execute(sql, params)

    def close(self):
        self._conn.close()


class SingleConnectionPool:
    """Stands in for SimpleConnectionPool; tracks connections not yet returned."""

    def __init__(self, conn):
        self.conn = conn
        self.checked_out = 0

    def getconn(self):
        self.checked_out += 1
        return self.conn

    def putconn(self, conn):
        assert conn is self.conn
        self.checked_out -= 1

    def closeall(self):
        self.conn.close()


@pytest.fixture
def pool(monkeypatch):
    raw = sqlite3.connect(":memory:", detect_types=sqlite3.PARSE_DECLTYPES)
    raw.row_factory = sqlite3.Row
    raw.execute("PRAGMA foreign_keys = ON")
    raw.executescript(SCHEMA)
    test_pool = SingleConnectionPool(SqliteConnection(raw))
    monkeypatch.setattr(connection, "_pool", test_pool)
    yield test_pool
    assert test_pool.checked_out == 0, "connection not released"
    raw.close()


@pytest.fixture
def author(pool):
    return AuthorDao().save_new_author(Author(first_name="Craig", last_name="Walls"))
