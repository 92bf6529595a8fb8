from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.enums import Role


@dataclass(frozen=True)
class UserRef:
    """A populated reference to a user: the id plus display fields.

    Nested records (submissions, attendance) only persist the id; the display
    fields are filled from the users collection when a response needs them.
    """

    user_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"_id": self.user_id}
        if self.first_name is not None or self.last_name is not None or self.email is not None:
            data.update({"firstName": self.first_name, "lastName": self.last_name, "email": self.email})
        return data


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, the password hash never leaves the service layer.
    """

    user_id: str
    first_name: str
    last_name: str
    email: str
    role: Role
    password_hash: str = ""
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_ref(self) -> UserRef:
        return UserRef(
            user_id=self.user_id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
        )

    def to_dict(self) -> dict:
        return {
            "_id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "role": self.role.value,
            "isActive": self.is_active,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
