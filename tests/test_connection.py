from unittest.mock import MagicMock, patch

import psycopg2
import pytest

import db.connection as connection
from db.init_db import create_tables


@pytest.fixture(autouse=True)
def no_pool(monkeypatch):
    monkeypatch.setattr(connection, "_pool", None)


def test_get_connection_before_init_raises():
    with pytest.raises(RuntimeError, match="init_pool"):
        connection.get_connection()


def test_release_without_pool_is_ignored():
    connection.release_connection(object())


def test_init_pool_uses_dsn_once():
    with patch.object(connection.pool, "SimpleConnectionPool") as factory:
        connection.init_pool(1, 3, dsn="postgresql://u:p@db:5432/books")
        connection.init_pool(1, 3, dsn="postgresql://other")

    factory.assert_called_once_with(1, 3, "postgresql://u:p@db:5432/books")
    assert connection._pool is factory.return_value


def test_init_pool_reraises_operational_error():
    with patch.object(
        connection.pool, "SimpleConnectionPool",
        side_effect=psycopg2.OperationalError("refused"),
    ):
        with pytest.raises(psycopg2.OperationalError):
            connection.init_pool()
    assert connection._pool is None


def test_get_release_and_close(monkeypatch):
    fake_pool = MagicMock()
    monkeypatch.setattr(connection, "_pool", fake_pool)

    conn = connection.get_connection()
    connection.release_connection(conn)
    connection.close_pool()

    fake_pool.putconn.assert_called_once_with(fake_pool.getconn.return_value)
    fake_pool.closeall.assert_called_once()
    assert connection._pool is None


def test_create_tables_commits(monkeypatch):
    fake_pool = MagicMock()
    monkeypatch.setattr(connection, "_pool", fake_pool)
    conn = fake_pool.getconn.return_value

    create_tables()

    cur = conn.cursor.return_value.__enter__.return_value
    sql = cur.execute.call_args.args[0]
    assert "CREATE TABLE IF NOT EXISTS book (" in sql
    assert "CREATE TABLE IF NOT EXISTS author_composite" in sql
    conn.commit.assert_called_once()
    fake_pool.putconn.assert_called_once_with(conn)


def test_create_tables_rolls_back_on_error(monkeypatch):
    fake_pool = MagicMock()
    monkeypatch.setattr(connection, "_pool", fake_pool)
    conn = fake_pool.getconn.return_value
    conn.cursor.return_value.__enter__.return_value.execute.side_effect = psycopg2.ProgrammingError("bad")

    with pytest.raises(psycopg2.ProgrammingError):
        create_tables()

    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
    fake_pool.putconn.assert_called_once_with(conn)
