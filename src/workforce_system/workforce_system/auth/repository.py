from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Principal, Session


class PrincipalRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Principal]:
        raise NotImplementedError


class SessionRepository(Protocol):
    def add(self, session: Session) -> None:
        raise NotImplementedError

    def get(self, token: str) -> Optional[Session]:
        raise NotImplementedError

    def revoke(self, token: str, *, revoked_at: datetime) -> bool:
        """Mark an active session revoked. Returns False if nothing changed."""

        raise NotImplementedError

    def delete_expired(self, *, now: datetime) -> int:
        raise NotImplementedError
