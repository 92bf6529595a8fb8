from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from pymongo import ASCENDING, DESCENDING

from ..common.attachment import Attachment
from ..common.datetime_utils import now_utc
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mongo_base import SESSIONS, id_str, to_object_id, to_reference_id
from ..users.model import UserRef
from .model import AttendanceRecord, ClassSession
from .repository import SessionRepository


class MongoSessionRepository(SessionRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _sessions(self):
        return self._conn.collection(SESSIONS)

    @staticmethod
    def _to_model(doc: dict) -> ClassSession:
        return ClassSession(
            session_id=str(doc["_id"]),
            class_id=id_str(doc.get("class")) or "",
            date=doc["date"],
            start_time=doc.get("startTime"),
            end_time=doc.get("endTime"),
            topic=doc.get("topic"),
            content=doc.get("content"),
            materials=tuple(
                Attachment(
                    name=m.get("name"),
                    file_url=m.get("fileUrl"),
                    file_type=m.get("fileType"),
                    uploaded_at=m.get("uploadedAt"),
                )
                for m in doc.get("materials") or []
            ),
            # Status stays a raw value when unrecognized; the aggregator rejects it loudly.
            attendance=tuple(
                AttendanceRecord(
                    student=UserRef(user_id=id_str(a.get("student")) or ""),
                    status=_status(a.get("status")),
                    recorded_by=id_str(a.get("recordedBy")) or "",
                    notes=a.get("notes"),
                )
                for a in doc.get("attendance") or []
            ),
            notes=doc.get("notes"),
            is_completed=bool(doc.get("isCompleted", False)),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    @staticmethod
    def _to_document(class_session: ClassSession) -> dict:
        return {
            "class": to_reference_id(class_session.class_id, "class"),
            "date": class_session.date,
            "startTime": class_session.start_time,
            "endTime": class_session.end_time,
            "topic": class_session.topic,
            "content": class_session.content,
            "materials": [
                {
                    "name": m.name,
                    "fileUrl": m.file_url,
                    "fileType": m.file_type,
                    "uploadedAt": m.uploaded_at or now_utc(),
                }
                for m in class_session.materials
            ],
            "attendance": [_attendance_document(a) for a in class_session.attendance],
            "notes": class_session.notes,
            "isCompleted": class_session.is_completed,
        }

    def get_by_id(self, session_id: str) -> Optional[ClassSession]:
        doc = self._sessions.find_one({"_id": to_object_id(session_id, what="Session")})
        return self._to_model(doc) if doc else None

    def list(
        self,
        *,
        class_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        is_completed: Optional[bool] = None,
        oldest_first: bool = False,
    ) -> Sequence[ClassSession]:
        query: dict = {}
        if class_id:
            query["class"] = to_reference_id(class_id, "class")
        if date_from is not None or date_to is not None:
            bounds = {}
            if date_from is not None:
                bounds["$gte"] = date_from
            if date_to is not None:
                bounds["$lte"] = date_to
            query["date"] = bounds
        if is_completed is not None:
            query["isCompleted"] = is_completed

        cursor = self._sessions.find(query).sort("date", ASCENDING if oldest_first else DESCENDING)
        return [self._to_model(doc) for doc in cursor]

    def create(self, class_session: ClassSession) -> str:
        doc = self._to_document(class_session)
        now = now_utc()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        return str(self._sessions.insert_one(doc).inserted_id)

    def replace_attendance(self, session_id: str, attendance: tuple[AttendanceRecord, ...]) -> bool:
        result = self._sessions.update_one(
            {"_id": to_object_id(session_id, what="Session")},
            {"$set": {"attendance": [_attendance_document(a) for a in attendance], "updatedAt": now_utc()}},
        )
        return result.matched_count > 0

    def save(self, class_session: ClassSession) -> bool:
        doc = self._to_document(class_session)
        del doc["attendance"]
        doc["updatedAt"] = now_utc()
        result = self._sessions.update_one(
            {"_id": to_object_id(class_session.session_id, what="Session")}, {"$set": doc}
        )
        return result.matched_count > 0

    def delete(self, session_id: str) -> bool:
        result = self._sessions.delete_one({"_id": to_object_id(session_id, what="Session")})
        return result.deleted_count > 0


def _attendance_document(record: AttendanceRecord) -> dict:
    return {
        "student": to_reference_id(record.student.user_id, "student"),
        "status": getattr(record.status, "value", record.status),
        "notes": record.notes,
        "recordedBy": to_reference_id(record.recorded_by, "recordedBy"),
    }


def _status(value):
    try:
        return AttendanceStatus(value)
    except ValueError:
        return value
