from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Session
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, session: Session) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(token, principal_email, role, emp_id, issued_at, expires_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    session.token,
                    session.principal_email,
                    session.role.value,
                    session.emp_id,
                    session.issued_at,
                    session.expires_at,
                ),
            )

    def get(self, token: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT token, principal_email, role, emp_id, issued_at, expires_at, revoked_at
                FROM sessions
                WHERE token=%s
                """,
                (token,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Session(
                token=row["token"],
                principal_email=row["principal_email"],
                role=Role(row["role"]),
                emp_id=row.get("emp_id"),
                issued_at=row["issued_at"],
                expires_at=row["expires_at"],
                revoked_at=row.get("revoked_at"),
            )

    def revoke(self, token: str, *, revoked_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE sessions SET revoked_at=%s WHERE token=%s AND revoked_at IS NULL",
                (revoked_at, token),
            )
            return cur.rowcount > 0

    def delete_expired(self, *, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE expires_at <= %s OR revoked_at IS NOT NULL", (now,))
            return int(cur.rowcount)
