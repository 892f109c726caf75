from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role
    department: Optional[str]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
        }


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' from seed.sql
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            email=user.email,
            role=user.role,
            department=user.department,
        )
