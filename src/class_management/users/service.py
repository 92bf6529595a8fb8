from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import parse_enum, require_bool, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    full_name: str
    role: Role


class AuthService:
    """Use case: register and authenticate users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: Role = Role.STUDENT,
    ) -> User:
        first_name = require_non_empty(first_name, "firstName")
        last_name = require_non_empty(last_name, "lastName")
        email = _normalize_email(email)
        require_min_length(password, "password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("User already exists")

        user_id = self._users.create_user(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
        logger.info("registered %s user %s", role.value, user_id)
        return self._users.get_by_id(user_id)

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise ValidationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise ValidationError("Invalid credentials")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    """Use case: read and maintain user accounts."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, role: Optional[str] = None, is_active: Optional[bool] = None) -> Sequence[User]:
        role_filter = parse_enum(Role, role, "role") if role else None
        return self._users.list(role=role_filter, is_active=is_active)

    def list_by_role(self, role: str) -> Sequence[User]:
        return self._users.list(role=parse_enum(Role, role, "role"), is_active=True)

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_user(self, user_id: str, changes: dict[str, Any]) -> User:
        user = self.get_user(user_id)

        fields: dict[str, Any] = {}
        if "firstName" in changes:
            fields["first_name"] = require_non_empty(changes["firstName"], "firstName")
        if "lastName" in changes:
            fields["last_name"] = require_non_empty(changes["lastName"], "lastName")
        if "email" in changes:
            email = _normalize_email(changes["email"])
            other = self._users.get_by_email(email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email already in use")
            fields["email"] = email
        if "role" in changes:
            fields["role"] = parse_enum(Role, changes["role"], "role")
        if "isActive" in changes:
            fields["is_active"] = require_bool(changes["isActive"], "isActive")

        updated = replace(user, **fields)
        if not self._users.save(updated):
            raise NotFoundError("User not found")
        return self.get_user(user_id)


def _normalize_email(value: Any) -> str:
    email = require_non_empty(value, "email").lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("email is not valid")
    return email
