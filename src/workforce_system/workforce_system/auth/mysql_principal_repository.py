from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Principal
from .repository import PrincipalRepository


class MySQLPrincipalRepository(PrincipalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Principal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT email, password_hash, role, emp_id FROM principals WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Principal(
                email=row["email"],
                password_hash=row["password_hash"],
                role=Role(row["role"]),
                emp_id=row.get("emp_id"),
            )
