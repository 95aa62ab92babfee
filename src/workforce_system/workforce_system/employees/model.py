from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Directory entry for one employee.

    ``role_name`` is a read-only projection of ``role_id`` filled in by the
    repository; writes ignore it.
    """

    emp_id: str
    first_name: str
    last_name: str
    email: str
    mobile_no: Optional[str] = None
    dob: Optional[date] = None
    role_id: Optional[int] = None
    salary: Optional[Decimal] = None
    date_of_joining: Optional[date] = None
    profile_photo: Optional[str] = None
    role_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
