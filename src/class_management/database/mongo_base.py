from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId

from ..core.exceptions import NotFoundError, ValidationError

USERS = "users"
CLASSES = "classes"
SESSIONS = "classsessions"
ASSIGNMENTS = "assignments"


def to_object_id(value: Any, *, what: str = "Document") -> ObjectId:
    """Convert an id from a URL or a domain object.

    A malformed id can never match a document, so it reports as not found.
    """

    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise NotFoundError(f"{what} not found")


def to_reference_id(value: Any, field_name: str) -> ObjectId:
    """Convert an id stored as a reference inside another document."""

    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise ValidationError(f"{field_name} is not a valid id")


def optional_reference_id(value: Any, field_name: str) -> Optional[ObjectId]:
    if value is None or value == "":
        return None
    return to_reference_id(value, field_name)


def id_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def sub_id(doc: dict) -> str:
    """Embedded documents get their own ``_id``; generate one if missing."""

    if not doc.get("_id"):
        doc["_id"] = ObjectId()
    return str(doc["_id"])
