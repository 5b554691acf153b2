"""
Shared plumbing for the table repositories.

Every public repository call acquires its own connection, runs exactly one
parameterized statement and releases the connection on every exit path.
Rows are read with a DictCursor and mapped by column name.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Optional, Sequence

import pymysql

from ..db.core import connect, cursor, get_conn

ConnFactory = Callable[[], Any]


class BaseRepository:
    def __init__(self, conn_factory: Optional[ConnFactory] = None) -> None:
        self._conn_factory = conn_factory or get_conn

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the affected row count."""
        with connect(self._conn_factory) as conn:
            with cursor(conn) as cur:
                cur.execute(sql, params)
                return cur.rowcount

    def _execute_insert(self, sql: str, params: Sequence[Any] = ()) -> tuple[int, int]:
        """Run an INSERT and return ``(affected, generated_key)``."""
        with connect(self._conn_factory) as conn:
            with cursor(conn) as cur:
                cur.execute(sql, params)
                return cur.rowcount, cur.lastrowid

    def _fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[dict]:
        with connect(self._conn_factory) as conn:
            with cursor(conn, pymysql.cursors.DictCursor) as cur:
                cur.execute(sql, params)
                return cur.fetchone()

    def _fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[dict]:
        with connect(self._conn_factory) as conn:
            with cursor(conn, pymysql.cursors.DictCursor) as cur:
                cur.execute(sql, params)
                return list(cur.fetchall() or [])


# --- Column conversions ------------------------------------------------------

def to_float(value: Any) -> Optional[float]:
    # DECIMAL columns come back as Decimal; NULL stays None
    if value is None:
        return None
    return float(value)


def to_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def to_bool(value: Any) -> bool:
    # TINYINT(1) comes back as int
    return bool(value)
