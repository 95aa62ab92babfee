from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import PayrollStatus
from ..core.exceptions import DuplicatePeriod, UnknownEmployee
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, to_decimal
from .model import NewPayrollRecord, PayrollRecord
from .repository import PayrollRepository

_SELECT = """
    SELECT p.id, p.emp_id, p.month, p.year,
           p.base_salary, p.allowances, p.deductions, p.net_salary,
           p.status, p.payment_date,
           e.first_name, e.last_name
    FROM payroll_records p
    JOIN employees e ON e.emp_id = p.emp_id
"""

_ORDER = " ORDER BY p.year DESC, p.month DESC, p.emp_id"


def _to_record(row: dict) -> PayrollRecord:
    return PayrollRecord(
        id=int(row["id"]),
        emp_id=row["emp_id"],
        month=int(row["month"]),
        year=int(row["year"]),
        base_salary=to_decimal(row["base_salary"]),
        allowances=to_decimal(row["allowances"]),
        deductions=to_decimal(row["deductions"]),
        net_salary=to_decimal(row["net_salary"]),
        status=PayrollStatus(row["status"]),
        payment_date=row.get("payment_date"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE p.id=%s", (int(record_id),))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_period(self, *, emp_id: str, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE p.emp_id=%s AND p.month=%s AND p.year=%s",
                (emp_id, int(month), int(year)),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_all(self) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + _ORDER)
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, emp_id: str) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE p.emp_id=%s" + _ORDER, (emp_id,))
            return [_to_record(r) for r in fetchall(cur)]

    def create(self, record: NewPayrollRecord) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payroll_records(
                        emp_id, month, year, base_salary, allowances, deductions,
                        net_salary, status, payment_date
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.emp_id,
                        record.month,
                        record.year,
                        record.base_salary,
                        record.allowances,
                        record.deductions,
                        record.net_salary,
                        record.status.value,
                        record.payment_date,
                    ),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicatePeriod(
                    f"Payroll for {record.emp_id} {record.month:02d}/{record.year} already exists"
                ) from e
            # employee deleted between the existence check and the insert
            raise UnknownEmployee("Employee not found") from e

    def update(self, record: PayrollRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET base_salary=%s, allowances=%s, deductions=%s, net_salary=%s,
                    status=%s, payment_date=%s
                WHERE id=%s
                """,
                (
                    record.base_salary,
                    record.allowances,
                    record.deductions,
                    record.net_salary,
                    record.status.value,
                    record.payment_date,
                    record.id,
                ),
            )

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_records WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0
