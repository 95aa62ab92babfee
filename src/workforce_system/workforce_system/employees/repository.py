from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Directory storage. The payroll engine reads it; only EmployeeService writes it."""

    def get_by_id(self, emp_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, employee: Employee, *, password_hash: Optional[str] = None) -> None:
        """Insert the employee, and its login principal when a hash is given.

        Both rows commit together. Raises DuplicateIdentifier on an emp_id or
        email collision.
        """

        raise NotImplementedError

    def update(self, employee: Employee) -> None:
        """Overwrite every field except emp_id. A login principal follows the new email."""

        raise NotImplementedError

    def update_photo(self, emp_id: str, profile_photo: str) -> bool:
        raise NotImplementedError

    def delete(self, emp_id: str) -> bool:
        raise NotImplementedError
