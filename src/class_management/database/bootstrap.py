from __future__ import annotations

import logging

from pymongo import ASCENDING, DESCENDING
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_utc
from ..core.enums import Role
from .connection import DatabaseConnection
from .mongo_base import ASSIGNMENTS, CLASSES, SESSIONS, USERS

logger = logging.getLogger(__name__)

DEMO_USERS = (
    {
        "firstName": "Demo",
        "lastName": "Teacher",
        "email": "teacher@example.com",
        "password": "teacher123",
        "role": Role.TEACHER.value,
    },
    {
        "firstName": "Demo",
        "lastName": "Student",
        "email": "student@example.com",
        "password": "student123",
        "role": Role.STUDENT.value,
    },
)


def ensure_indexes(conn: DatabaseConnection) -> list[str]:
    """Create the query indexes (idempotent). Returns the index names."""

    db = conn.database
    names = [
        db[USERS].create_index([("email", ASCENDING)], unique=True),
        db[USERS].create_index([("role", ASCENDING), ("isActive", ASCENDING)]),
        db[CLASSES].create_index([("teacher", ASCENDING), ("academicYear", ASCENDING), ("semester", ASCENDING)]),
        db[CLASSES].create_index([("students.student", ASCENDING)]),
        db[SESSIONS].create_index([("class", ASCENDING), ("date", DESCENDING)]),
        db[SESSIONS].create_index([("attendance.student", ASCENDING)]),
        db[ASSIGNMENTS].create_index([("class", ASCENDING), ("dueDate", ASCENDING)]),
        db[ASSIGNMENTS].create_index([("submissions.student", ASCENDING)]),
    ]
    logger.info("indexes ready: %s", ", ".join(names))
    return names


def list_collections(conn: DatabaseConnection) -> list[str]:
    return sorted(conn.database.list_collection_names())


def ensure_demo_users(conn: DatabaseConnection) -> int:
    """Insert demo accounts that do not exist yet. Returns how many were created."""

    users = conn.collection(USERS)
    created = 0
    for demo in DEMO_USERS:
        if users.find_one({"email": demo["email"]}, projection={"_id": 1}):
            continue
        now = now_utc()
        users.insert_one(
            {
                "firstName": demo["firstName"],
                "lastName": demo["lastName"],
                "email": demo["email"],
                "password": generate_password_hash(demo["password"]),
                "role": demo["role"],
                "isActive": True,
                "createdAt": now,
                "updatedAt": now,
            }
        )
        created += 1
    logger.info("demo users created: %d", created)
    return created
