from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .auth.mysql_principal_repository import MySQLPrincipalRepository
from .auth.mysql_session_repository import MySQLSessionRepository
from .auth.repository import PrincipalRepository, SessionRepository
from .auth.service import AccessGate
from .common.datetime_utils import Clock, now_utc
from .core.constants import DEFAULT_SESSION_TTL_MINUTES
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .roles.mysql_role_repository import MySQLRoleRepository
from .roles.repository import RoleRepository
from .roles.service import RoleService


@dataclass(frozen=True)
class Container:
    principals_repo: PrincipalRepository
    sessions_repo: SessionRepository
    employees_repo: EmployeeRepository
    roles_repo: RoleRepository
    payroll_repo: PayrollRepository

    access_gate: AccessGate
    employee_service: EmployeeService
    role_service: RoleService
    payroll_service: PayrollService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    principals_repo: PrincipalRepository,
    sessions_repo: SessionRepository,
    employees_repo: EmployeeRepository,
    roles_repo: RoleRepository,
    payroll_repo: PayrollRepository,
    session_ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
    clock: Clock = now_utc,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services on top of any repository implementations."""
    access_gate = AccessGate(
        principals_repo,
        sessions_repo,
        session_ttl=timedelta(minutes=int(session_ttl_minutes)),
        clock=clock,
    )
    return Container(
        principals_repo=principals_repo,
        sessions_repo=sessions_repo,
        employees_repo=employees_repo,
        roles_repo=roles_repo,
        payroll_repo=payroll_repo,
        access_gate=access_gate,
        employee_service=EmployeeService(access_gate, employees_repo, roles_repo, principals_repo),
        role_service=RoleService(access_gate, roles_repo),
        payroll_service=PayrollService(access_gate, payroll_repo, employees_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, session_ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    return wire_services(
        principals_repo=MySQLPrincipalRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        session_ttl_minutes=session_ttl_minutes,
        conn=conn,
    )
