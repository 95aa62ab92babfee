from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class JobRole:
    """Directory role assigned to employees (e.g. Manager, Developer).

    Not to be confused with ``core.enums.Role``, the login role of a principal.
    """

    id: int
    role_name: str
    description: Optional[str] = None
