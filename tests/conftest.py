from __future__ import annotations

from datetime import datetime

import pytest

from src.workforce_system.workforce_system.auth.model import Principal
from src.workforce_system.workforce_system.container import Container, wire_services
from src.workforce_system.workforce_system.core.enums import Role
from src.workforce_system.workforce_system.employees.model import Employee

from tests.fakes import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    EMPLOYEE_PASSWORD,
    FakeClock,
    InMemoryEmployees,
    InMemoryPayroll,
    InMemoryPrincipals,
    InMemoryRoles,
    InMemorySessions,
    InMemoryStore,
    add_employee,
    fast_hash,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def store() -> InMemoryStore:
    s = InMemoryStore()
    s.principals[ADMIN_EMAIL] = Principal(email=ADMIN_EMAIL, password_hash=fast_hash(ADMIN_PASSWORD), role=Role.ADMIN)
    return s


@pytest.fixture
def container(store, clock) -> Container:
    return wire_services(
        principals_repo=InMemoryPrincipals(store),
        sessions_repo=InMemorySessions(store),
        employees_repo=InMemoryEmployees(store),
        roles_repo=InMemoryRoles(store),
        payroll_repo=InMemoryPayroll(store),
        session_ttl_minutes=30,
        clock=clock,
    )


@pytest.fixture
def admin_token(container) -> str:
    return container.access_gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin").token


@pytest.fixture
def e1(store) -> Employee:
    return add_employee(store, "EMP001", "e1@example.com", first_name="Alice")


@pytest.fixture
def e2(store) -> Employee:
    return add_employee(store, "EMP002", "e2@example.com", first_name="Bob")


@pytest.fixture
def e1_token(container, e1) -> str:
    return container.access_gate.authenticate(e1.email, EMPLOYEE_PASSWORD, "employee").token
