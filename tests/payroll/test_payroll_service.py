from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.workforce_system.workforce_system.core.enums import PayrollStatus
from src.workforce_system.workforce_system.core.exceptions import (
    CapabilityDenied,
    DuplicatePeriod,
    PayrollRecordNotFound,
    SessionInvalid,
    UnknownEmployee,
    ValidationError,
)


def _create(container, token, emp_id="EMP001", **overrides):
    fields = dict(emp_id=emp_id, month=3, year=2024, base_salary=5000, allowances=500, deductions=200)
    fields.update(overrides)
    return container.payroll_service.create_record(token, **fields)


def test_payroll_lifecycle_for_one_period(container, admin_token, e1):
    service = container.payroll_service

    record = _create(container, admin_token)
    assert record.net_salary == Decimal("5300.00")
    assert record.status == PayrollStatus.PENDING
    assert record.first_name == "Alice"

    paid = service.update_record(admin_token, record.id, {"status": "paid", "payment_date": "2024-03-31"})
    assert paid.status == PayrollStatus.PAID
    assert paid.payment_date == date(2024, 3, 31)
    assert paid.net_salary == Decimal("5300.00")

    with pytest.raises(DuplicatePeriod):
        _create(container, admin_token, base_salary=9999)

    assert service.get_record(admin_token, record.id) == paid
    assert len(service.list_records(admin_token)) == 1


def test_allowances_and_deductions_default_to_zero(container, admin_token, e1):
    record = container.payroll_service.create_record(admin_token, emp_id="EMP001", month="1", year="2024", base_salary="1234.5")
    assert record.allowances == Decimal("0.00")
    assert record.deductions == Decimal("0.00")
    assert record.net_salary == Decimal("1234.50")


def test_update_recomputes_net_salary(container, admin_token, e1):
    record = _create(container, admin_token)
    updated = container.payroll_service.update_record(admin_token, record.id, {"deductions": "1000"})
    assert updated.net_salary == Decimal("4500.00")
    assert updated.base_salary == Decimal("5000.00")


def test_client_supplied_net_salary_is_ignored(container, admin_token, e1):
    record = _create(container, admin_token)
    updated = container.payroll_service.update_record(
        admin_token, record.id, {"net_salary": "1.00", "allowances": "600"}
    )
    assert updated.net_salary == Decimal("5400.00")


def test_period_fields_cannot_be_changed(container, admin_token, e1, e2):
    service = container.payroll_service
    record = _create(container, admin_token)

    # a changed value is rejected, the same value is accepted as a no-op
    for patch in ({"month": 4}, {"year": 2025}, {"emp_id": "EMP002"}):
        with pytest.raises(ValidationError):
            service.update_record(admin_token, record.id, patch)

    same = service.update_record(admin_token, record.id, {"emp_id": "EMP001", "month": "03", "year": 2024})
    assert same.period == (2024, 3)
    assert same.emp_id == "EMP001"


@pytest.mark.parametrize(
    "overrides",
    [
        {"month": 0},
        {"month": 13},
        {"year": 1999},
        {"base_salary": -1},
        {"allowances": "-0.01"},
        {"deductions": "abc"},
        {"base_salary": None},
        {"status": "late"},
        {"payment_date": "31/03/2024"},
        {"base_salary": "1e30"},
        {"base_salary": "99999999999999"},
        {"allowances": "9999999999.995"},
    ],
)
def test_invalid_input_is_rejected(container, admin_token, e1, overrides):
    with pytest.raises(ValidationError):
        _create(container, admin_token, **overrides)
    assert container.payroll_service.list_records(admin_token) == []


def test_create_for_unknown_employee(container, admin_token):
    with pytest.raises(UnknownEmployee):
        _create(container, admin_token, emp_id="NOPE")


def test_same_period_for_another_employee_is_allowed(container, admin_token, e1, e2):
    _create(container, admin_token)
    other = _create(container, admin_token, emp_id="EMP002")
    assert other.emp_id == "EMP002"


def test_delete_record(container, admin_token, e1):
    service = container.payroll_service
    record = _create(container, admin_token)
    service.delete_record(admin_token, record.id)

    with pytest.raises(PayrollRecordNotFound):
        service.get_record(admin_token, record.id)
    with pytest.raises(PayrollRecordNotFound):
        service.delete_record(admin_token, record.id)


def test_employee_cannot_manage_payroll(container, admin_token, e1_token, e1):
    record = _create(container, admin_token)
    with pytest.raises(CapabilityDenied):
        container.payroll_service.update_record(e1_token, record.id, {"status": "paid"})
    with pytest.raises(CapabilityDenied):
        container.payroll_service.list_records(e1_token)


def test_employee_sees_only_own_records(container, admin_token, e1, e2, e1_token):
    _create(container, admin_token, month=1)
    _create(container, admin_token, month=2)
    _create(container, admin_token, emp_id="EMP002", month=1)

    own = container.payroll_service.list_for_employee(e1_token)
    assert [r.month for r in own] == [2, 1]
    assert {r.emp_id for r in own} == {"EMP001"}

    assert container.payroll_service.list_for_employee(e1_token, "EMP001") == own
    with pytest.raises(CapabilityDenied):
        container.payroll_service.list_for_employee(e1_token, "EMP002")


def test_admin_has_no_own_payroll(container, admin_token):
    with pytest.raises(CapabilityDenied):
        container.payroll_service.list_for_employee(admin_token)


def test_logged_out_admin_cannot_create(container, admin_token, e1):
    container.access_gate.invalidate(admin_token)
    with pytest.raises(SessionInvalid):
        _create(container, admin_token)


def test_net_salary_must_fit_amount_column(container, admin_token, e1, store):
    service = container.payroll_service
    with pytest.raises(ValidationError):
        _create(container, admin_token, base_salary="9999999999.99", allowances="0.01", deductions=0)
    assert store.payroll == {}

    record = _create(container, admin_token, base_salary="9999999999.99", allowances=0, deductions=0)
    with pytest.raises(ValidationError):
        service.update_record(admin_token, record.id, {"allowances": "5"})
    assert service.get_record(admin_token, record.id).net_salary == Decimal("9999999999.99")


def test_blank_emp_id_means_own_records(container, admin_token, e1, e1_token):
    _create(container, admin_token)
    for blank in ("", "   "):
        assert [r.emp_id for r in container.payroll_service.list_for_employee(e1_token, blank)] == ["EMP001"]


def test_repeated_float_edits_do_not_drift(container, admin_token, e1):
    service = container.payroll_service
    record = _create(container, admin_token, base_salary=0.3, allowances=0.1, deductions=0.2)
    assert record.net_salary == Decimal("0.20")

    for allowance, deduction in ((0.1, 0.2), (0.2, 0.1), (1.1, 2.2), (0.7, 0.1)):
        record = service.update_record(admin_token, record.id, {"allowances": allowance, "deductions": deduction})
    assert record.allowances == Decimal("0.70")
    assert record.deductions == Decimal("0.10")
    assert record.net_salary == Decimal("0.90")
    assert str(record.net_salary) == "0.90"
