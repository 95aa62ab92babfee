from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.datetime_utils import Clock, now_utc
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_SESSION_TTL_MINUTES, SESSION_TOKEN_BYTES
from ..core.enums import ROLE_CAPABILITIES, Capability, Role
from ..core.exceptions import (
    AuthorizationError,
    CapabilityDenied,
    InvalidCredentials,
    RoleMismatch,
    SessionExpired,
    SessionInvalid,
    ValidationError,
)
from .model import AuthContext, Session
from .repository import PrincipalRepository, SessionRepository

logger = logging.getLogger(__name__)


class AccessGate:
    """Use case: login, per-call capability checks, logout.

    Every service method that reads or writes directory or payroll data calls
    ``authorize`` first, with the token the caller passed in.
    """

    def __init__(
        self,
        principals: PrincipalRepository,
        sessions: SessionRepository,
        *,
        session_ttl: timedelta = timedelta(minutes=DEFAULT_SESSION_TTL_MINUTES),
        clock: Clock = now_utc,
    ):
        if session_ttl <= timedelta(0):
            raise ValueError("session_ttl must be positive")
        self._principals = principals
        self._sessions = sessions
        self._session_ttl = session_ttl
        self._clock = clock

    def authenticate(self, identifier: str, secret: str, claimed_role: Role | str) -> Session:
        if not isinstance(identifier, str) or not isinstance(secret, str):
            raise InvalidCredentials("Invalid email or password")
        email = require_non_empty(identifier, "Email").lower()
        try:
            role = Role(claimed_role)
        except ValueError:
            raise ValidationError("Unknown login type")

        principal = self._principals.get_by_email(email)
        if not principal:
            logger.info("Login failed for %s: unknown identifier", email)
            raise InvalidCredentials("Invalid email or password")

        try:
            ok = check_password_hash(principal.password_hash, secret)
        except (TypeError, ValueError):
            # placeholder or corrupted hash values
            ok = False

        if not ok:
            logger.info("Login failed for %s: bad password", email)
            raise InvalidCredentials("Invalid email or password")

        if principal.role != role:
            logger.warning("Login refused for %s: claimed %s, stored %s", email, role.value, principal.role.value)
            raise RoleMismatch(f"This account cannot sign in as {role.value}")

        issued_at = self._clock()
        session = Session(
            token=secrets.token_urlsafe(SESSION_TOKEN_BYTES),
            principal_email=principal.email,
            role=principal.role,
            emp_id=principal.emp_id,
            issued_at=issued_at,
            expires_at=issued_at + self._session_ttl,
        )
        self._sessions.add(session)
        logger.info("Session issued for %s (role=%s)", principal.email, principal.role.value)
        return session

    def authorize(self, token: Optional[str], capability: Capability) -> AuthContext:
        if not token:
            raise SessionInvalid("Please log in")

        session = self._sessions.get(token)
        if not session or session.is_revoked:
            raise SessionInvalid("Session is not valid, please log in again")

        if session.is_expired(self._clock()):
            raise SessionExpired("Session expired, please log in again")

        if capability not in ROLE_CAPABILITIES.get(session.role, frozenset()):
            logger.warning("Denied %s to %s (role=%s)", capability.value, session.principal_email, session.role.value)
            raise CapabilityDenied("You do not have permission for this action")

        return AuthContext(principal_email=session.principal_email, role=session.role, emp_id=session.emp_id)

    def is_allowed(self, token: Optional[str], capability: Capability) -> bool:
        try:
            self.authorize(token, capability)
        except AuthorizationError:
            return False
        return True

    def invalidate(self, token: Optional[str]) -> None:
        if not token:
            return
        if self._sessions.revoke(token, revoked_at=self._clock()):
            logger.info("Session revoked")

    def purge_expired(self) -> int:
        removed = self._sessions.delete_expired(now=self._clock())
        if removed:
            logger.info("Purged %d stale sessions", removed)
        return removed
