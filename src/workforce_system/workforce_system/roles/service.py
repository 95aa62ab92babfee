from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..auth.service import AccessGate
from ..common.validators import optional_text, parse_int, require_non_empty
from ..core.enums import Capability
from ..core.exceptions import DuplicateIdentifier, ReferentialConflict, UnknownRole
from .model import JobRole
from .repository import RoleRepository

logger = logging.getLogger(__name__)


class RoleService:
    """Use case: manage directory roles (admin)."""

    def __init__(self, gate: AccessGate, roles: RoleRepository):
        self._gate = gate
        self._roles = roles

    def _require(self, role_id: Any) -> JobRole:
        role = self._roles.get_by_id(parse_int(role_id, "Role id"))
        if not role:
            raise UnknownRole("Role not found")
        return role

    def list_roles(self, token: Optional[str]) -> Sequence[JobRole]:
        self._gate.authorize(token, Capability.MANAGE_ROLES)
        return self._roles.list_all()

    def get_role(self, token: Optional[str], role_id: Any) -> JobRole:
        self._gate.authorize(token, Capability.MANAGE_ROLES)
        return self._require(role_id)

    def create_role(self, token: Optional[str], *, role_name: str, description: Optional[str] = None) -> JobRole:
        ctx = self._gate.authorize(token, Capability.MANAGE_ROLES)
        role_name = require_non_empty(role_name, "Role name")

        if self._roles.get_by_name(role_name):
            raise DuplicateIdentifier(f"Role '{role_name}' already exists")

        role_id = self._roles.create(role_name=role_name, description=optional_text(description))
        logger.info("Role %s (%s) created by %s", role_id, role_name, ctx.principal_email)
        return self._require(role_id)

    def update_role(self, token: Optional[str], role_id: Any, patch: Mapping[str, Any]) -> JobRole:
        ctx = self._gate.authorize(token, Capability.MANAGE_ROLES)
        current = self._require(role_id)

        role_name = current.role_name
        if "role_name" in patch:
            role_name = require_non_empty(patch.get("role_name"), "Role name")
        description = optional_text(patch["description"]) if "description" in patch else current.description

        if role_name != current.role_name:
            other = self._roles.get_by_name(role_name)
            if other and other.id != current.id:
                raise DuplicateIdentifier(f"Role '{role_name}' already exists")

        self._roles.update(role_id=current.id, role_name=role_name, description=description)
        logger.info("Role %s updated by %s", current.id, ctx.principal_email)
        return self._require(current.id)

    def delete_role(self, token: Optional[str], role_id: Any) -> None:
        ctx = self._gate.authorize(token, Capability.MANAGE_ROLES)
        role = self._require(role_id)

        if not self._roles.delete_if_unreferenced(role.id):
            raise ReferentialConflict(f"Role '{role.role_name}' is assigned to employees and cannot be deleted")
        logger.info("Role %s deleted by %s", role.id, ctx.principal_email)
