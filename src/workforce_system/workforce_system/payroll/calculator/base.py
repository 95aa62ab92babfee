from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class NetSalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll totals)."""

    @abstractmethod
    def net_salary(self, base_salary: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        raise NotImplementedError
