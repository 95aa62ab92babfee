from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Principal:
    """An authenticable identity with exactly one role.

    Note: provisioned outside the gate; the gate only reads it.
    """

    email: str
    password_hash: str
    role: Role
    emp_id: Optional[str] = None


@dataclass(frozen=True)
class Session:
    token: str
    principal_email: str
    role: Role
    emp_id: Optional[str]
    issued_at: datetime
    expires_at: datetime
    revoked_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None


@dataclass(frozen=True)
class AuthContext:
    """What an authorized call knows about its caller."""

    principal_email: str
    role: Role
    emp_id: Optional[str]
