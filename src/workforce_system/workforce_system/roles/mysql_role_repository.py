from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.exceptions import DuplicateIdentifier
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, is_row_referenced
from .model import JobRole
from .repository import RoleRepository

_COLUMNS = "id, role_name, description"


def _to_role(row: dict) -> JobRole:
    return JobRole(id=int(row["id"]), role_name=row["role_name"], description=row.get("description"))


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, role_id: int) -> Optional[JobRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM roles WHERE id=%s", (int(role_id),))
            row = fetchone(cur)
            return _to_role(row) if row else None

    def get_by_name(self, role_name: str) -> Optional[JobRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM roles WHERE role_name=%s", (role_name,))
            row = fetchone(cur)
            return _to_role(row) if row else None

    def list_all(self) -> Sequence[JobRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM roles ORDER BY role_name")
            return [_to_role(r) for r in fetchall(cur)]

    def create(self, *, role_name: str, description: Optional[str]) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO roles(role_name, description) VALUES(%s,%s)",
                    (role_name, description),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateIdentifier(f"Role '{role_name}' already exists") from e
            raise

    def update(self, *, role_id: int, role_name: str, description: Optional[str]) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE roles SET role_name=%s, description=%s WHERE id=%s",
                    (role_name, description, int(role_id)),
                )
        except mysql_errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateIdentifier(f"Role '{role_name}' already exists") from e
            raise

    def delete_if_unreferenced(self, role_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    DELETE FROM roles
                    WHERE id=%s
                      AND NOT EXISTS (SELECT 1 FROM employees e WHERE e.role_id=%s)
                    """,
                    (int(role_id), int(role_id)),
                )
                return cur.rowcount > 0
        except mysql_errors.IntegrityError as e:
            # an employee was assigned concurrently; the FK restricts the delete
            if is_row_referenced(e):
                return False
            raise
