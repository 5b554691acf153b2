import logging
from contextlib import contextmanager
from typing import Any, Callable

import pymysql

from ..config import DbSettings
from ..errors import ConnectivityFailure

__all__ = [
    "get_conn",
    "connect",
    "cursor",
    "store_errors",
]


@contextmanager
def store_errors():
    """Re-raise any PyMySQL error as ConnectivityFailure carrying the driver message."""
    try:
        yield
    except pymysql.MySQLError as e:
        raise ConnectivityFailure(str(e)) from e


def get_conn(settings: DbSettings | None = None):
    """Create and return a new PyMySQL connection (autocommit enabled).

    Uses the given settings, or reads them from the environment when omitted.
    A connection that cannot be opened surfaces as ConnectivityFailure; there
    is no retry.
    """
    if settings is None:
        settings = DbSettings.from_env()
    try:
        return pymysql.connect(
            host=settings.host,
            port=settings.port,
            user=settings.user,
            password=settings.password,
            database=settings.database,
            autocommit=True,
            connect_timeout=settings.connect_timeout,
            charset="utf8mb4",
            use_unicode=True,
        )
    except pymysql.MySQLError as e:
        logging.error(f"Error connecting to DB {settings.host}:{settings.port}/{settings.database}: {e}")
        raise ConnectivityFailure(str(e)) from e


@contextmanager
def connect(conn_factory: Callable[[], Any] | None = None):
    """Context manager that yields a DB connection and closes it afterwards.

    ``conn_factory`` defaults to get_conn with settings read from the environment.
    """
    with store_errors():
        conn = conn_factory() if conn_factory is not None else get_conn()
    try:
        with store_errors():
            yield conn
    finally:
        try:
            conn.close()
        except Exception:
            pass


@contextmanager
def cursor(conn, cursor_class=None):
    """Context manager that yields a DB cursor for a given connection.

    Pass ``pymysql.cursors.DictCursor`` to read rows by column name.
    """
    cur = conn.cursor(cursor_class) if cursor_class is not None else conn.cursor()
    try:
        with store_errors():
            yield cur
    finally:
        try:
            cur.close()
        except Exception:
            pass
