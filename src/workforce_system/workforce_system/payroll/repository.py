from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewPayrollRecord, PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, *, emp_id: str, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollRecord]:
        """Admin list, joined with employee names, newest period first."""

        raise NotImplementedError

    def list_for_employee(self, emp_id: str) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def create(self, record: NewPayrollRecord) -> int:
        """Insert a record. Raises DuplicatePeriod if the period is taken."""

        raise NotImplementedError

    def update(self, record: PayrollRecord) -> None:
        """Write amounts, net_salary, status and payment_date. Period and employee are never written."""

        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError
