from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollRecord:
    """One payroll cycle for one employee.

    ``net_salary`` is always produced by a NetSalaryCalculator from the three
    stored inputs. ``first_name``/``last_name`` are read-only projections of
    the employee for list views.
    """

    id: int
    emp_id: str
    month: int
    year: int
    base_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: PayrollStatus
    payment_date: Optional[date] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def period(self) -> tuple[int, int]:
        return self.year, self.month


@dataclass(frozen=True)
class NewPayrollRecord:
    emp_id: str
    month: int
    year: int
    base_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: PayrollStatus
    payment_date: Optional[date] = None
