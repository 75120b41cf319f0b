"""
repositories/entity_repo.py
---------------------------
Generic repository over a single table.

A ``TableMapping`` describes the table, its key column(s), its value columns,
the row mapper and how keys are obtained (``IdStrategy``). The same Book and
Author models are stored in several tables that differ only in key strategy:

    BOOK, AUTHOR      book / author, database-generated key
    BOOK_UUID         book_uuid, client-generated UUID key
    BOOK_NATURAL      book_natural, keyed by title
    AUTHOR_COMPOSITE  author_composite, keyed by (first_name, last_name)

Attribute names on the model match column names, so values are read with
``getattr(entity, column)``.
"""

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional

from db.connection import ROW_CURSOR, get_connection, release_connection
from repositories.exceptions import NotFoundError
from repositories.mappers import (
    row_to_author,
    row_to_book,
    row_to_composite_author,
    row_to_natural_book,
    row_to_uuid_book,
    single_row,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class IdStrategy(str, Enum):
    """How the primary key of a new row is obtained."""
    IDENTITY = "identity"   # generated by the database
    UUID = "uuid"           # uuid4 generated before insert when absent
    ASSIGNED = "assigned"   # supplied by the caller (natural / composite keys)


@dataclass(frozen=True)
class TableMapping:
    """
    Describes how one model type is stored in one table.

    Attributes:
        entity: Name used in log lines and errors.
        table: Table name.
        key: Key column(s); also attribute names on the model.
        columns: Non-key columns, in insert order.
        mapper: Turns a result row into a model instance.
        id_strategy: How new keys are obtained.
    """
    entity: str
    table: str
    key: tuple[str, ...]
    columns: tuple[str, ...]
    mapper: Callable[[Mapping[str, Any]], Any]
    id_strategy: IdStrategy = IdStrategy.IDENTITY

    def __post_init__(self):
        if not self.key:
            raise ValueError(f"{self.table}: at least one key column is required")
        if self.id_strategy is not IdStrategy.ASSIGNED and len(self.key) != 1:
            raise ValueError(f"{self.table}: {self.id_strategy.value} keys must be a single column")

    @property
    def all_columns(self) -> tuple[str, ...]:
        return self.key + self.columns


class EntityRepository:
    """CRUD operations for any table described by a ``TableMapping``."""

    def __init__(self, mapping: TableMapping):
        self.mapping = mapping

    # ── READ ──────────────────────────────────────────────

    def find_all(self) -> list:
        """Return every row, ordered by key."""
        m = self.mapping
        sql = f"SELECT * FROM {m.table} ORDER BY {', '.join(m.key)};"
        return [m.mapper(r) for r in self._fetch_all(sql, ())]

    def get_by_id(self, key: Any) -> Any:
        """
        Fetch one row by key. Composite keys are passed as a tuple
        (or ``NameId``) in key-column order.

        Raises:
            NotFoundError: If no row has that key.
        """
        criteria = self._key_criteria(key)
        return self.find_one_by(**criteria)

    def find_by_id(self, key: Any) -> Optional[Any]:
        """Like ``get_by_id`` but returns None when the row is missing."""
        try:
            return self.get_by_id(key)
        except NotFoundError:
            return None

    def exists_by_id(self, key: Any) -> bool:
        criteria = self._key_criteria(key)
        sql = f"SELECT 1 AS present FROM {self.mapping.table} WHERE {self._where(criteria)} LIMIT 1;"
        return bool(self._fetch_all(sql, tuple(criteria.values())))

    def count(self) -> int:
        sql = f"SELECT COUNT(*) AS total FROM {self.mapping.table};"
        return int(self._fetch_all(sql, ())[0]["total"])

    def find_one_by(self, **criteria) -> Any:
        """
        Fetch the one row whose columns equal ``criteria`` exactly.

        Raises:
            ValueError: If a criterion names an unknown column.
            NotFoundError: If no row matches.
            NonUniqueResultError: If several rows match.
        """
        m = self.mapping
        unknown = set(criteria) - set(m.all_columns)
        if not criteria or unknown:
            raise ValueError(f"Invalid {m.table} criteria: {sorted(unknown) or 'none given'}")
        sql = f"SELECT * FROM {m.table} WHERE {self._where(criteria)};"
        rows = self._fetch_all(sql, tuple(criteria.values()))
        return m.mapper(single_row(rows, m.entity, criteria))

    # ── CREATE ────────────────────────────────────────────

    def save_new(self, entity: Any) -> Any:
        """
        Insert ``entity`` and read it back by its key.

        IDENTITY tables ignore any key on ``entity``; UUID tables generate one
        when it is missing; ASSIGNED tables require it.

        Raises:
            ValueError: If an ASSIGNED key is missing.
        """
        m = self.mapping
        if m.id_strategy is IdStrategy.IDENTITY:
            columns = m.columns
            sql = (
                f"INSERT INTO {m.table} ({', '.join(columns)}) "
                f"VALUES ({', '.join(['%s'] * len(columns))}) "
                f"RETURNING {m.key[0]};"
            )
        else:
            if m.id_strategy is IdStrategy.UUID and getattr(entity, m.key[0]) is None:
                entity = replace(entity, **{m.key[0]: uuid.uuid4()})
            missing = [k for k in m.key if getattr(entity, k) is None]
            if missing:
                raise ValueError(f"{m.entity} key {missing} must be assigned before saving")
            columns = m.all_columns
            sql = (
                f"INSERT INTO {m.table} ({', '.join(columns)}) "
                f"VALUES ({', '.join(['%s'] * len(columns))});"
            )

        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql, tuple(getattr(entity, c) for c in columns))
                if m.id_strategy is IdStrategy.IDENTITY:
                    key = cur.fetchone()[m.key[0]]
                else:
                    key = self._key_of(entity)
            conn.commit()
            logger.info(f"Saved {m.entity} {key!r} into {m.table}")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to save {m.entity} into {m.table}: {e}")
            raise
        finally:
            release_connection(conn)
        return self.get_by_id(key)

    def save_all(self, entities: Iterable[Any]) -> list:
        return [self.save_new(e) for e in entities]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entity: Any) -> Any:
        """
        Overwrite every non-key column of the row with ``entity``'s key,
        then read it back.

        Raises:
            NotFoundError: If no row has that key.
        """
        m = self.mapping
        key = self._key_of(entity)
        if m.columns:
            criteria = self._key_criteria(key)
            assignments = ", ".join(f"{c} = %s" for c in m.columns)
            sql = f"UPDATE {m.table} SET {assignments} WHERE {self._where(criteria)};"
            params = tuple(getattr(entity, c) for c in m.columns) + tuple(criteria.values())
            self._execute(sql, params, f"update {m.entity} {key!r}")
        return self.get_by_id(key)

    # ── DELETE ────────────────────────────────────────────

    def delete_by_id(self, key: Any) -> None:
        """Delete a row by key. Deleting a missing key is not an error."""
        criteria = self._key_criteria(key)
        sql = f"DELETE FROM {self.mapping.table} WHERE {self._where(criteria)};"
        if self._execute(sql, tuple(criteria.values()), f"delete {self.mapping.entity} {key!r}"):
            logger.info(f"Deleted {self.mapping.entity} {key!r} from {self.mapping.table}")

    def delete_all(self) -> int:
        """Delete every row. Returns the number of rows removed."""
        deleted = self._execute(f"DELETE FROM {self.mapping.table};", (), f"clear {self.mapping.table}")
        logger.info(f"Deleted {deleted} rows from {self.mapping.table}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    def _key_of(self, entity: Any) -> Any:
        values = tuple(getattr(entity, k) for k in self.mapping.key)
        return values[0] if len(values) == 1 else values

    def _key_criteria(self, key: Any) -> dict:
        m = self.mapping
        if len(m.key) > 1 and not isinstance(key, (tuple, list)):
            raise ValueError(f"{m.table} key must be a tuple of {len(m.key)} values, got {key!r}")
        values = (key,) if len(m.key) == 1 else tuple(key)
        if len(values) != len(m.key):
            raise ValueError(f"{m.table} key needs {len(m.key)} values, got {len(values)}")
        return dict(zip(m.key, values))

    @staticmethod
    def _where(criteria: dict) -> str:
        return " AND ".join(f"{c} = %s" for c in criteria)

    @staticmethod
    def _fetch_all(sql: str, params: tuple) -> list:
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=ROW_CURSOR) as cur:
                cur.execute(sql, params)
                return cur.fetchall()
        finally:
            release_connection(conn)

    @staticmethod
    def _execute(sql: str, params: tuple, action: str) -> int:
        """Run one write statement and commit. Returns the affected row count."""
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                affected = cur.rowcount
            conn.commit()
            return affected
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise
        finally:
            release_connection(conn)


# ── Mappings ──────────────────────────────────────────────

BOOK = TableMapping(
    entity="Book",
    table="book",
    key=("id",),
    columns=("isbn", "publisher", "title", "author_id"),
    mapper=row_to_book,
)

AUTHOR = TableMapping(
    entity="Author",
    table="author",
    key=("id",),
    columns=("first_name", "last_name"),
    mapper=row_to_author,
)

BOOK_UUID = TableMapping(
    entity="Book",
    table="book_uuid",
    key=("id",),
    columns=("title", "isbn", "publisher"),
    mapper=row_to_uuid_book,
    id_strategy=IdStrategy.UUID,
)

BOOK_NATURAL = TableMapping(
    entity="Book",
    table="book_natural",
    key=("title",),
    columns=("isbn", "publisher"),
    mapper=row_to_natural_book,
    id_strategy=IdStrategy.ASSIGNED,
)

AUTHOR_COMPOSITE = TableMapping(
    entity="Author",
    table="author_composite",
    key=("first_name", "last_name"),
    columns=(),
    mapper=row_to_composite_author,
    id_strategy=IdStrategy.ASSIGNED,
)
