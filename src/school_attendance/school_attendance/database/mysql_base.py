from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_date(value: Any) -> date:
    """Normalize DATE/DATETIME column values to a calendar date.

    mysql-connector can return:
    - datetime.date
    - datetime.datetime (DATETIME columns)
    - string (e.g. '2024-02-05')
    """

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")

    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()

    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
