from __future__ import annotations

from decimal import Decimal

from ...common.validators import quantize_money
from .base import NetSalaryCalculator


class StandardNetSalaryCalculator(NetSalaryCalculator):
    """Standard rule: base + allowances - deductions, rounded to cents."""

    def net_salary(self, base_salary: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        return quantize_money(Decimal(base_salary) + Decimal(allowances) - Decimal(deductions))
