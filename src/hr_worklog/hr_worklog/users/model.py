from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee account.

    Plain data object (no DB access code). Only the fields the work-log core
    and login need are carried here.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    department: Optional[str] = None
    is_active: bool = True

    @property
    def is_hr(self) -> bool:
        return self.role == Role.HR
