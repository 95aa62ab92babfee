from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.workforce_system.workforce_system.core.enums import Role
from src.workforce_system.workforce_system.core.exceptions import (
    CapabilityDenied,
    DuplicateIdentifier,
    SessionInvalid,
    UnknownEmployee,
    UnknownRole,
    ValidationError,
)


def _new_employee(container, token, **overrides):
    fields = dict(
        emp_id="EMP010",
        first_name="Carol",
        last_name="Nguyen",
        email="carol@example.com",
        password="carol-pass",
        dob="1990-05-01",
        salary="4200",
        date_of_joining="2023-01-09T00:00:00.000Z",
    )
    fields.update(overrides)
    return container.employee_service.create_employee(token, **fields)


def test_create_employee_provisions_login(container, admin_token, store):
    emp = _new_employee(container, admin_token, email="Carol@Example.com")

    assert emp.email == "carol@example.com"
    assert emp.dob == date(1990, 5, 1)
    assert emp.date_of_joining == date(2023, 1, 9)
    assert emp.salary == Decimal("4200.00")

    principal = store.principals["carol@example.com"]
    assert principal.role == Role.EMPLOYEE
    assert principal.emp_id == "EMP010"

    session = container.access_gate.authenticate("carol@example.com", "carol-pass", "employee")
    assert session.emp_id == "EMP010"


def test_create_employee_without_password_has_no_login(container, admin_token, store):
    _new_employee(container, admin_token, password=None)
    assert "carol@example.com" not in store.principals


def test_short_password_is_rejected(container, admin_token):
    with pytest.raises(ValidationError):
        _new_employee(container, admin_token, password="123")


def test_duplicate_emp_id_and_email(container, admin_token, e1):
    with pytest.raises(DuplicateIdentifier):
        _new_employee(container, admin_token, emp_id=e1.emp_id)
    with pytest.raises(DuplicateIdentifier):
        _new_employee(container, admin_token, email=e1.email)
    # admin principal email is taken too
    with pytest.raises(DuplicateIdentifier):
        _new_employee(container, admin_token, email="admin@example.com")


def test_unknown_role_is_rejected(container, admin_token):
    with pytest.raises(UnknownRole):
        _new_employee(container, admin_token, role_id=42)


def test_update_employee(container, admin_token, e1):
    role = container.role_service.create_role(admin_token, role_name="Manager")
    emp = container.employee_service.update_employee(
        admin_token, e1.emp_id, {"mobile_no": "0901", "role_id": str(role.id), "emp_id": e1.emp_id}
    )
    assert emp.mobile_no == "0901"
    assert emp.role_id == role.id
    assert emp.role_name == "Manager"
    assert emp.first_name == e1.first_name


def test_emp_id_cannot_change(container, admin_token, e1):
    with pytest.raises(ValidationError):
        container.employee_service.update_employee(admin_token, e1.emp_id, {"emp_id": "EMP999"})


def test_email_change_moves_login(container, admin_token, store, e1):
    container.employee_service.update_employee(admin_token, e1.emp_id, {"email": "alice@example.com"})

    assert "e1@example.com" not in store.principals
    assert store.principals["alice@example.com"].emp_id == e1.emp_id


def test_email_change_to_taken_address(container, admin_token, e1, e2):
    with pytest.raises(DuplicateIdentifier):
        container.employee_service.update_employee(admin_token, e1.emp_id, {"email": e2.email})


def test_delete_employee_cascades(container, admin_token, store, e1, e1_token):
    container.payroll_service.create_record(admin_token, emp_id=e1.emp_id, month=3, year=2024, base_salary=100)
    container.employee_service.delete_employee(admin_token, e1.emp_id)

    assert store.payroll == {}
    assert e1.email not in store.principals
    with pytest.raises(SessionInvalid):
        container.employee_service.get_own_profile(e1_token)
    with pytest.raises(UnknownEmployee):
        container.employee_service.delete_employee(admin_token, e1.emp_id)


def test_own_profile_and_photo(container, e1_token, e1):
    service = container.employee_service
    assert service.get_own_profile(e1_token).emp_id == e1.emp_id

    updated = service.update_own_photo(e1_token, "uploads/emp001.png")
    assert updated.profile_photo == "uploads/emp001.png"

    with pytest.raises(ValidationError):
        service.update_own_photo(e1_token, " ")


def test_employee_cannot_use_directory(container, e1_token, e2):
    with pytest.raises(CapabilityDenied):
        container.employee_service.list_employees(e1_token)
    with pytest.raises(CapabilityDenied):
        container.employee_service.get_employee(e1_token, e2.emp_id)


def test_admin_has_no_own_profile(container, admin_token):
    with pytest.raises(CapabilityDenied):
        container.employee_service.get_own_profile(admin_token)
