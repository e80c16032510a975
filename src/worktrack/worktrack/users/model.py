from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: a user's identity record.

    Plain data object, no database access here.
    """

    id: int
    email: str
    full_name: str
    password_hash: str
    role: Role
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    bio: Optional[str] = None

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER


@dataclass(frozen=True)
class EmployeeOption:
    """Row for the task assignment picker."""

    id: int
    full_name: str
