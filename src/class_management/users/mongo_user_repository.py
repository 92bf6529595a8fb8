from __future__ import annotations

from typing import Iterable, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING

from ..common.datetime_utils import now_utc
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mongo_base import USERS, to_object_id
from .model import User, UserRef
from .repository import UserRepository

_REF_PROJECTION = {"firstName": 1, "lastName": 1, "email": 1}


class MongoUserRepository(UserRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _users(self):
        return self._conn.collection(USERS)

    @staticmethod
    def _to_model(doc: dict) -> User:
        return User(
            user_id=str(doc["_id"]),
            first_name=doc.get("firstName", ""),
            last_name=doc.get("lastName", ""),
            email=doc.get("email", ""),
            role=Role(doc.get("role", Role.STUDENT.value)),
            password_hash=doc.get("password", ""),
            is_active=bool(doc.get("isActive", True)),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def get_by_id(self, user_id: str) -> Optional[User]:
        doc = self._users.find_one({"_id": to_object_id(user_id, what="User")})
        return self._to_model(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[User]:
        doc = self._users.find_one({"email": email.lower()})
        return self._to_model(doc) if doc else None

    def list(self, *, role: Optional[Role] = None, is_active: Optional[bool] = None) -> Sequence[User]:
        query: dict = {}
        if role is not None:
            query["role"] = role.value
        if is_active is not None:
            query["isActive"] = is_active

        cursor = self._users.find(query).sort([("lastName", ASCENDING), ("firstName", ASCENDING)])
        return [self._to_model(doc) for doc in cursor]

    def create_user(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Role,
    ) -> str:
        now = now_utc()
        result = self._users.insert_one(
            {
                "firstName": first_name,
                "lastName": last_name,
                "email": email.lower(),
                "password": password_hash,
                "role": role.value,
                "isActive": True,
                "createdAt": now,
                "updatedAt": now,
            }
        )
        return str(result.inserted_id)

    def save(self, user: User) -> bool:
        result = self._users.update_one(
            {"_id": to_object_id(user.user_id, what="User")},
            {
                "$set": {
                    "firstName": user.first_name,
                    "lastName": user.last_name,
                    "email": user.email.lower(),
                    "role": user.role.value,
                    "isActive": user.is_active,
                    "updatedAt": now_utc(),
                }
            },
        )
        return result.matched_count > 0

    def get_refs(self, user_ids: Iterable[str]) -> dict[str, UserRef]:
        object_ids = []
        for user_id in set(user_ids):
            try:
                object_ids.append(ObjectId(user_id))
            except (InvalidId, TypeError):
                continue
        if not object_ids:
            return {}

        refs = {}
        for doc in self._users.find({"_id": {"$in": object_ids}}, projection=_REF_PROJECTION):
            user_id = str(doc["_id"])
            refs[user_id] = UserRef(
                user_id=user_id,
                first_name=doc.get("firstName"),
                last_name=doc.get("lastName"),
                email=doc.get("email"),
            )
        return refs
