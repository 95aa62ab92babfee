from __future__ import annotations

from datetime import timedelta

import pytest

from src.workforce_system.workforce_system.auth.model import Principal
from src.workforce_system.workforce_system.auth.service import AccessGate
from src.workforce_system.workforce_system.core.enums import Capability, Role
from src.workforce_system.workforce_system.core.exceptions import (
    CapabilityDenied,
    InvalidCredentials,
    RoleMismatch,
    SessionExpired,
    SessionInvalid,
    ValidationError,
)

from tests.fakes import ADMIN_EMAIL, ADMIN_PASSWORD, EMPLOYEE_PASSWORD


def test_admin_login_issues_session_with_ttl(container, store, fixed_now):
    session = container.access_gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin")

    assert session.role == Role.ADMIN
    assert session.emp_id is None
    assert session.issued_at == fixed_now
    assert session.expires_at == fixed_now + timedelta(minutes=30)
    assert store.sessions[session.token] == session


def test_login_email_is_case_insensitive(container):
    session = container.access_gate.authenticate("  Admin@Example.COM ", ADMIN_PASSWORD, Role.ADMIN)
    assert session.principal_email == ADMIN_EMAIL


def test_tokens_are_unique(container):
    a = container.access_gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin")
    b = container.access_gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin")
    assert a.token != b.token


def test_wrong_password_and_unknown_user_look_the_same(container, store):
    with pytest.raises(InvalidCredentials) as wrong:
        container.access_gate.authenticate(ADMIN_EMAIL, "nope", "admin")
    with pytest.raises(InvalidCredentials) as unknown:
        container.access_gate.authenticate("ghost@example.com", ADMIN_PASSWORD, "admin")

    assert str(wrong.value) == str(unknown.value)
    assert store.sessions == {}


def test_role_mismatch_creates_no_session(container, store, e1):
    with pytest.raises(RoleMismatch):
        container.access_gate.authenticate(e1.email, EMPLOYEE_PASSWORD, "admin")
    with pytest.raises(RoleMismatch):
        container.access_gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "employee")
    assert store.sessions == {}


def test_unknown_login_type_is_rejected(container):
    with pytest.raises(ValidationError):
        container.access_gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "superuser")


def test_placeholder_hash_never_authenticates(container, store):
    store.principals["legacy@example.com"] = Principal(
        email="legacy@example.com", password_hash="CHANGE_ME", role=Role.ADMIN
    )
    with pytest.raises(InvalidCredentials):
        container.access_gate.authenticate("legacy@example.com", "CHANGE_ME", "admin")


def test_authorize_returns_caller_context(container, e1_token, e1):
    ctx = container.access_gate.authorize(e1_token, Capability.VIEW_OWN_PROFILE)
    assert ctx.role == Role.EMPLOYEE
    assert ctx.emp_id == e1.emp_id
    assert ctx.principal_email == e1.email


@pytest.mark.parametrize("token", [None, "", "not-a-token"])
def test_missing_or_unknown_token_is_invalid(container, token):
    with pytest.raises(SessionInvalid):
        container.access_gate.authorize(token, Capability.MANAGE_PAYROLL)


def test_session_expires_exactly_at_expiry(container, admin_token, clock):
    clock.advance(minutes=29, seconds=59)
    container.access_gate.authorize(admin_token, Capability.MANAGE_PAYROLL)

    clock.advance(seconds=1)
    with pytest.raises(SessionExpired):
        container.access_gate.authorize(admin_token, Capability.MANAGE_PAYROLL)


def test_employee_cannot_use_admin_capabilities(container, e1_token):
    for capability in (Capability.MANAGE_EMPLOYEES, Capability.MANAGE_ROLES, Capability.MANAGE_PAYROLL):
        with pytest.raises(CapabilityDenied):
            container.access_gate.authorize(e1_token, capability)


def test_admin_has_no_own_profile(container, admin_token):
    assert not container.access_gate.is_allowed(admin_token, Capability.VIEW_OWN_PROFILE)
    assert container.access_gate.is_allowed(admin_token, Capability.MANAGE_ROLES)


def test_invalidate_is_idempotent(container, admin_token):
    gate = container.access_gate
    gate.invalidate(admin_token)
    gate.invalidate(admin_token)
    gate.invalidate("never-issued")
    gate.invalidate(None)

    with pytest.raises(SessionInvalid):
        gate.authorize(admin_token, Capability.MANAGE_ROLES)


def test_invalidate_only_affects_one_session(container):
    gate = container.access_gate
    first = gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin").token
    second = gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin").token

    gate.invalidate(first)
    assert gate.is_allowed(second, Capability.MANAGE_ROLES)


def test_purge_expired_drops_stale_and_revoked(container, clock):
    gate = container.access_gate
    old = gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin").token
    revoked = gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin").token
    gate.invalidate(revoked)

    clock.advance(minutes=20)
    fresh = gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD, "admin").token
    clock.advance(minutes=15)

    assert gate.purge_expired() == 2
    assert gate.is_allowed(fresh, Capability.MANAGE_ROLES)
    with pytest.raises(SessionInvalid):
        gate.authorize(old, Capability.MANAGE_ROLES)


def test_non_positive_ttl_is_rejected(container):
    with pytest.raises(ValueError):
        AccessGate(container.principals_repo, container.sessions_repo, session_ttl=timedelta(0))
