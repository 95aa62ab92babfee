from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..auth.repository import PrincipalRepository
from ..auth.service import AccessGate
from ..common.validators import (
    normalize_email,
    optional_text,
    parse_int,
    parse_money,
    parse_optional_date,
    require_min_length,
    require_non_empty,
)
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Capability
from ..core.exceptions import CapabilityDenied, DuplicateIdentifier, UnknownEmployee, UnknownRole, ValidationError
from ..roles.repository import RoleRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "mobile_no",
    "dob",
    "role_id",
    "salary",
    "date_of_joining",
    "profile_photo",
)


class EmployeeService:
    """Use cases: employee directory (admin) and own profile (employee)."""

    def __init__(
        self,
        gate: AccessGate,
        employees: EmployeeRepository,
        roles: RoleRepository,
        principals: PrincipalRepository,
    ):
        self._gate = gate
        self._employees = employees
        self._roles = roles
        self._principals = principals

    # -------- helpers --------
    def _require(self, emp_id: Any) -> Employee:
        emp = self._employees.get_by_id(require_non_empty(emp_id, "Employee ID"))
        if not emp:
            raise UnknownEmployee("Employee not found")
        return emp

    def _parse_role_id(self, value: Any) -> Optional[int]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        role_id = parse_int(value, "Role")
        if not self._roles.get_by_id(role_id):
            raise UnknownRole("Role not found")
        return role_id

    def _parse_field(self, name: str, value: Any) -> Any:
        if name == "first_name":
            return require_non_empty(value, "First name")
        if name == "last_name":
            return require_non_empty(value, "Last name")
        if name == "email":
            return normalize_email(value)
        if name in ("dob", "date_of_joining"):
            return parse_optional_date(value, name)
        if name == "role_id":
            return self._parse_role_id(value)
        if name == "salary":
            if value is None or (isinstance(value, str) and not value.strip()):
                return None
            return parse_money(value, "Salary")
        return optional_text(value)

    def _ensure_email_free(self, email: str, *, emp_id: Optional[str] = None) -> None:
        holder = self._employees.get_by_email(email)
        if holder and holder.emp_id != emp_id:
            raise DuplicateIdentifier(f"Email {email} is already in use")

        principal = self._principals.get_by_email(email)
        if principal and (emp_id is None or principal.emp_id != emp_id):
            raise DuplicateIdentifier(f"Email {email} is already in use")

    # -------- admin --------
    def list_employees(self, token: Optional[str]) -> Sequence[Employee]:
        self._gate.authorize(token, Capability.MANAGE_EMPLOYEES)
        return self._employees.list_all()

    def get_employee(self, token: Optional[str], emp_id: Any) -> Employee:
        self._gate.authorize(token, Capability.MANAGE_EMPLOYEES)
        return self._require(emp_id)

    def create_employee(
        self,
        token: Optional[str],
        *,
        emp_id: str,
        first_name: str,
        last_name: str,
        email: str,
        password: Optional[str] = None,
        mobile_no: Optional[str] = None,
        dob: Any = None,
        role_id: Any = None,
        salary: Any = None,
        date_of_joining: Any = None,
        profile_photo: Optional[str] = None,
    ) -> Employee:
        ctx = self._gate.authorize(token, Capability.MANAGE_EMPLOYEES)

        emp_id = require_non_empty(emp_id, "Employee ID")
        fields = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "mobile_no": mobile_no,
            "dob": dob,
            "role_id": role_id,
            "salary": salary,
            "date_of_joining": date_of_joining,
            "profile_photo": profile_photo,
        }
        parsed = {name: self._parse_field(name, value) for name, value in fields.items()}

        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        if self._employees.get_by_id(emp_id):
            raise DuplicateIdentifier(f"Employee ID {emp_id} already exists")
        self._ensure_email_free(parsed["email"])

        self._employees.create(Employee(emp_id=emp_id, **parsed), password_hash=password_hash)
        logger.info("Employee %s created by %s (login=%s)", emp_id, ctx.principal_email, password_hash is not None)
        return self._require(emp_id)

    def update_employee(self, token: Optional[str], emp_id: Any, patch: Mapping[str, Any]) -> Employee:
        ctx = self._gate.authorize(token, Capability.MANAGE_EMPLOYEES)
        current = self._require(emp_id)

        if "emp_id" in patch and str(patch["emp_id"]).strip() != current.emp_id:
            raise ValidationError("Employee ID cannot be changed")

        changes = {name: self._parse_field(name, patch[name]) for name in _EDITABLE_FIELDS if name in patch}
        if "email" in changes and changes["email"] != current.email:
            self._ensure_email_free(changes["email"], emp_id=current.emp_id)

        self._employees.update(replace(current, **changes))
        logger.info("Employee %s updated by %s", current.emp_id, ctx.principal_email)
        return self._require(current.emp_id)

    def delete_employee(self, token: Optional[str], emp_id: Any) -> None:
        ctx = self._gate.authorize(token, Capability.MANAGE_EMPLOYEES)
        emp = self._require(emp_id)
        if not self._employees.delete(emp.emp_id):
            raise UnknownEmployee("Employee not found")
        logger.info("Employee %s deleted by %s", emp.emp_id, ctx.principal_email)

    # -------- self-service --------
    def get_own_profile(self, token: Optional[str]) -> Employee:
        ctx = self._gate.authorize(token, Capability.VIEW_OWN_PROFILE)
        if not ctx.emp_id:
            raise CapabilityDenied("This account has no employee profile")
        return self._require(ctx.emp_id)

    def update_own_photo(self, token: Optional[str], profile_photo: Optional[str]) -> Employee:
        ctx = self._gate.authorize(token, Capability.UPDATE_OWN_PHOTO)
        if not ctx.emp_id:
            raise CapabilityDenied("This account has no employee profile")

        photo_ref = require_non_empty(profile_photo, "Profile photo")
        emp = self._require(ctx.emp_id)
        self._employees.update_photo(emp.emp_id, photo_ref)
        logger.info("Employee %s updated own photo", emp.emp_id)
        return self._require(emp.emp_id)
