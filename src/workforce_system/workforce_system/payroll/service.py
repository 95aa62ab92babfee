from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..auth.service import AccessGate
from ..common.validators import (
    optional_text,
    parse_int,
    parse_int_in_range,
    parse_money,
    parse_optional_date,
    require_non_empty,
)
from ..core.constants import MAX_MONEY, MAX_PAYROLL_YEAR, MIN_PAYROLL_YEAR
from ..core.enums import Capability, PayrollStatus
from ..core.exceptions import (
    CapabilityDenied,
    DuplicatePeriod,
    PayrollRecordNotFound,
    UnknownEmployee,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .calculator.base import NetSalaryCalculator
from .calculator.standard_calculator import StandardNetSalaryCalculator
from .model import NewPayrollRecord, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")

# Fixed once the record exists.
_IMMUTABLE_FIELDS = ("emp_id", "month", "year")


def _parse_status(value: Any) -> PayrollStatus:
    if value is None or (isinstance(value, str) and not value.strip()):
        return PayrollStatus.PENDING
    try:
        return PayrollStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Status must be one of pending, paid, cancelled")


def _parse_month(value: Any) -> int:
    return parse_int_in_range(value, "Month", 1, 12)


def _parse_year(value: Any) -> int:
    return parse_int_in_range(value, "Year", MIN_PAYROLL_YEAR, MAX_PAYROLL_YEAR)


class PayrollService:
    """Payroll record lifecycle.

    Invariants kept here:
    - net_salary is recomputed from base_salary, allowances and deductions on
      every write and is never taken from the caller;
    - one record per (emp_id, month, year);
    - emp_id, month and year are fixed after creation;
    - an employee only ever sees records of the employee bound to their session.
    """

    def __init__(
        self,
        gate: AccessGate,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[NetSalaryCalculator] = None,
    ):
        self._gate = gate
        self._payroll = payroll
        self._employees = employees
        self._calculator = calculator or StandardNetSalaryCalculator()

    def _net_salary(self, base: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        net = self._calculator.net_salary(base, allowances, deductions)
        if abs(net) > MAX_MONEY:
            raise ValidationError(f"Net salary cannot exceed {MAX_MONEY}")
        return net

    def _require(self, record_id: Any) -> PayrollRecord:
        record = self._payroll.get_by_id(parse_int(record_id, "Payroll id"))
        if not record:
            raise PayrollRecordNotFound("Payroll record not found")
        return record

    def create_record(
        self,
        token: Optional[str],
        *,
        emp_id: str,
        month: Any,
        year: Any,
        base_salary: Any,
        allowances: Any = None,
        deductions: Any = None,
        status: Any = None,
        payment_date: Any = None,
    ) -> PayrollRecord:
        ctx = self._gate.authorize(token, Capability.MANAGE_PAYROLL)

        emp_id = require_non_empty(emp_id, "Employee")
        month_n = _parse_month(month)
        year_n = _parse_year(year)
        base = parse_money(base_salary, "Base salary")
        allow = parse_money(allowances, "Allowances", default=ZERO)
        deduct = parse_money(deductions, "Deductions", default=ZERO)
        status_v = _parse_status(status)
        paid_on = parse_optional_date(payment_date, "Payment date")

        if not self._employees.get_by_id(emp_id):
            raise UnknownEmployee("Employee not found")

        if self._payroll.get_for_period(emp_id=emp_id, month=month_n, year=year_n):
            raise DuplicatePeriod(f"Payroll for {emp_id} {month_n:02d}/{year_n} already exists")

        record_id = self._payroll.create(
            NewPayrollRecord(
                emp_id=emp_id,
                month=month_n,
                year=year_n,
                base_salary=base,
                allowances=allow,
                deductions=deduct,
                net_salary=self._net_salary(base, allow, deduct),
                status=status_v,
                payment_date=paid_on,
            )
        )
        logger.info("Payroll %s created for %s %02d/%d by %s", record_id, emp_id, month_n, year_n, ctx.principal_email)
        return self._require(record_id)

    def update_record(self, token: Optional[str], record_id: Any, patch: Mapping[str, Any]) -> PayrollRecord:
        ctx = self._gate.authorize(token, Capability.MANAGE_PAYROLL)
        current = self._require(record_id)

        for name in _IMMUTABLE_FIELDS:
            if name not in patch:
                continue
            if name == "emp_id":
                changed = str(patch[name]).strip() != current.emp_id
            else:
                changed = parse_int(patch[name], name) != getattr(current, name)
            if changed:
                raise ValidationError(f"{name} cannot be changed after the record is created")

        base = parse_money(patch["base_salary"], "Base salary") if "base_salary" in patch else current.base_salary
        allow = (
            parse_money(patch["allowances"], "Allowances", default=ZERO) if "allowances" in patch else current.allowances
        )
        deduct = (
            parse_money(patch["deductions"], "Deductions", default=ZERO) if "deductions" in patch else current.deductions
        )
        status_v = _parse_status(patch["status"]) if "status" in patch else current.status
        paid_on = (
            parse_optional_date(patch["payment_date"], "Payment date") if "payment_date" in patch else current.payment_date
        )

        updated = replace(
            current,
            base_salary=base,
            allowances=allow,
            deductions=deduct,
            net_salary=self._net_salary(base, allow, deduct),
            status=status_v,
            payment_date=paid_on,
        )
        self._payroll.update(updated)
        logger.info("Payroll %s updated by %s (status=%s)", current.id, ctx.principal_email, status_v.value)
        return self._require(current.id)

    def delete_record(self, token: Optional[str], record_id: Any) -> None:
        ctx = self._gate.authorize(token, Capability.MANAGE_PAYROLL)
        rid = parse_int(record_id, "Payroll id")
        if not self._payroll.delete(rid):
            raise PayrollRecordNotFound("Payroll record not found")
        logger.info("Payroll %s deleted by %s", rid, ctx.principal_email)

    def get_record(self, token: Optional[str], record_id: Any) -> PayrollRecord:
        self._gate.authorize(token, Capability.MANAGE_PAYROLL)
        return self._require(record_id)

    def list_records(self, token: Optional[str]) -> Sequence[PayrollRecord]:
        self._gate.authorize(token, Capability.MANAGE_PAYROLL)
        return self._payroll.list_all()

    def list_for_employee(self, token: Optional[str], emp_id: Optional[str] = None) -> Sequence[PayrollRecord]:
        """Payroll history of the caller's own employee record.

        ``emp_id`` is only accepted when it names the caller's own employee; blank
        means the same as absent.
        """
        ctx = self._gate.authorize(token, Capability.VIEW_OWN_PROFILE)
        if not ctx.emp_id:
            raise CapabilityDenied("This account has no employee profile")
        requested = optional_text(emp_id)
        if requested is not None and requested != ctx.emp_id:
            logger.warning("%s asked for payroll of %s", ctx.principal_email, emp_id)
            raise CapabilityDenied("You can only view your own payroll")

        return [r for r in self._payroll.list_for_employee(ctx.emp_id) if r.emp_id == ctx.emp_id]
