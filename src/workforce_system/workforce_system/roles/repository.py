from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import JobRole


class RoleRepository(Protocol):
    def get_by_id(self, role_id: int) -> Optional[JobRole]:
        raise NotImplementedError

    def get_by_name(self, role_name: str) -> Optional[JobRole]:
        raise NotImplementedError

    def list_all(self) -> Sequence[JobRole]:
        raise NotImplementedError

    def create(self, *, role_name: str, description: Optional[str]) -> int:
        """Insert a role. Raises DuplicateIdentifier on a name collision."""

        raise NotImplementedError

    def update(self, *, role_id: int, role_name: str, description: Optional[str]) -> None:
        raise NotImplementedError

    def delete_if_unreferenced(self, role_id: int) -> bool:
        """Delete the role unless an employee references it.

        Check and delete happen in one statement. Returns False when the role
        is still referenced.
        """

        raise NotImplementedError
