from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import Role
from ..core.exceptions import DuplicateIdentifier, UnknownRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchall, fetchone, is_duplicate_key, to_decimal
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.emp_id, e.first_name, e.last_name, e.email, e.mobile_no, e.dob,
           e.role_id, e.salary, e.date_of_joining, e.profile_photo,
           r.role_name
    FROM employees e
    LEFT JOIN roles r ON r.id = e.role_id
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        emp_id=row["emp_id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        mobile_no=row.get("mobile_no"),
        dob=row.get("dob"),
        role_id=int(row["role_id"]) if row.get("role_id") is not None else None,
        salary=to_decimal(row.get("salary")),
        date_of_joining=row.get("date_of_joining"),
        profile_photo=row.get("profile_photo"),
        role_name=row.get("role_name"),
    )


def _raise_duplicate(e: mysql_errors.IntegrityError, employee: Employee) -> None:
    key = duplicate_key_name(e)
    if key == "uq_employees_email":
        raise DuplicateIdentifier(f"Email {employee.email} is already in use") from e
    raise DuplicateIdentifier(f"Employee ID {employee.emp_id} already exists") from e


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, emp_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.emp_id=%s", (emp_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.email=%s", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY e.emp_id")
            return [_to_employee(r) for r in fetchall(cur)]

    def create(self, employee: Employee, *, password_hash: Optional[str] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO employees(
                        emp_id, first_name, last_name, email, mobile_no, dob,
                        role_id, salary, date_of_joining, profile_photo
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee.emp_id,
                        employee.first_name,
                        employee.last_name,
                        employee.email,
                        employee.mobile_no,
                        employee.dob,
                        employee.role_id,
                        employee.salary,
                        employee.date_of_joining,
                        employee.profile_photo,
                    ),
                )
            except mysql_errors.IntegrityError as e:
                if is_duplicate_key(e):
                    _raise_duplicate(e, employee)
                raise UnknownRole("Role not found") from e

            if password_hash is None:
                return

            try:
                cur.execute(
                    "INSERT INTO principals(email, password_hash, role, emp_id) VALUES(%s,%s,%s,%s)",
                    (employee.email, password_hash, Role.EMPLOYEE.value, employee.emp_id),
                )
            except mysql_errors.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicateIdentifier(f"Email {employee.email} is already in use") from e
                raise

    def update(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    UPDATE employees
                    SET first_name=%s, last_name=%s, email=%s, mobile_no=%s, dob=%s,
                        role_id=%s, salary=%s, date_of_joining=%s, profile_photo=%s
                    WHERE emp_id=%s
                    """,
                    (
                        employee.first_name,
                        employee.last_name,
                        employee.email,
                        employee.mobile_no,
                        employee.dob,
                        employee.role_id,
                        employee.salary,
                        employee.date_of_joining,
                        employee.profile_photo,
                        employee.emp_id,
                    ),
                )
                cur.execute(
                    "UPDATE principals SET email=%s WHERE emp_id=%s AND email<>%s",
                    (employee.email, employee.emp_id, employee.email),
                )
            except mysql_errors.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicateIdentifier(f"Email {employee.email} is already in use") from e
                raise UnknownRole("Role not found") from e

    def update_photo(self, emp_id: str, profile_photo: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET profile_photo=%s WHERE emp_id=%s", (profile_photo, emp_id))
            return cur.rowcount > 0

    def delete(self, emp_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE emp_id=%s", (emp_id,))
            return cur.rowcount > 0
