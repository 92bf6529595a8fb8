from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User, UserRef


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this protocol, never on the MongoDB implementation.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list(self, *, role: Optional[Role] = None, is_active: Optional[bool] = None) -> Sequence[User]:
        """Users matching the filters, sorted by last name then first name."""

        raise NotImplementedError

    def create_user(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Role,
    ) -> str:
        raise NotImplementedError

    def save(self, user: User) -> bool:
        raise NotImplementedError

    def get_refs(self, user_ids: Iterable[str]) -> dict[str, UserRef]:
        """Populate display fields for the given ids; unknown ids are left out."""

        raise NotImplementedError
