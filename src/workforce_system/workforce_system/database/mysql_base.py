from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One transaction: commit when the block exits cleanly, roll back otherwise."""
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


def is_duplicate_key(exc: mysql_errors.Error) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def is_row_referenced(exc: mysql_errors.Error) -> bool:
    return getattr(exc, "errno", None) in {errorcode.ER_ROW_IS_REFERENCED, errorcode.ER_ROW_IS_REFERENCED_2}


def duplicate_key_name(exc: mysql_errors.Error) -> str:
    """Name of the violated UNIQUE key, parsed from the server message.

    MySQL reports: Duplicate entry 'x' for key 'employees.uq_employees_email'.
    """
    msg = str(getattr(exc, "msg", "") or exc)
    marker = "for key '"
    idx = msg.rfind(marker)
    if idx < 0:
        return ""
    name = msg[idx + len(marker):].rstrip("'")
    return name.rsplit(".", 1)[-1]


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
