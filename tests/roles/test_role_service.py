from __future__ import annotations

import pytest

from src.workforce_system.workforce_system.core.exceptions import (
    CapabilityDenied,
    DuplicateIdentifier,
    ReferentialConflict,
    UnknownRole,
    ValidationError,
)


def test_create_and_list_roles(container, admin_token):
    service = container.role_service
    dev = service.create_role(admin_token, role_name="  Developer ", description="Writes code")
    service.create_role(admin_token, role_name="Accountant")

    assert dev.role_name == "Developer"
    assert [r.role_name for r in service.list_roles(admin_token)] == ["Accountant", "Developer"]


def test_role_name_is_unique(container, admin_token):
    service = container.role_service
    service.create_role(admin_token, role_name="Developer")
    qa = service.create_role(admin_token, role_name="QA")

    with pytest.raises(DuplicateIdentifier):
        service.create_role(admin_token, role_name="Developer")
    with pytest.raises(DuplicateIdentifier):
        service.update_role(admin_token, qa.id, {"role_name": "Developer"})


def test_blank_role_name_is_rejected(container, admin_token):
    with pytest.raises(ValidationError):
        container.role_service.create_role(admin_token, role_name="   ")


def test_update_role_keeps_unpatched_fields(container, admin_token):
    service = container.role_service
    role = service.create_role(admin_token, role_name="Developer", description="Writes code")
    updated = service.update_role(admin_token, role.id, {"role_name": "Engineer"})

    assert updated.role_name == "Engineer"
    assert updated.description == "Writes code"


def test_delete_role_in_use_is_refused(container, admin_token, store, e1):
    service = container.role_service
    role = service.create_role(admin_token, role_name="Developer")
    container.employee_service.update_employee(admin_token, e1.emp_id, {"role_id": role.id})

    with pytest.raises(ReferentialConflict):
        service.delete_role(admin_token, role.id)
    assert store.roles[role.id].role_name == "Developer"


def test_delete_unreferenced_role(container, admin_token):
    service = container.role_service
    role = service.create_role(admin_token, role_name="Intern")
    service.delete_role(admin_token, role.id)

    with pytest.raises(UnknownRole):
        service.get_role(admin_token, role.id)


def test_employee_cannot_manage_roles(container, e1_token):
    with pytest.raises(CapabilityDenied):
        container.role_service.create_role(e1_token, role_name="Boss")
