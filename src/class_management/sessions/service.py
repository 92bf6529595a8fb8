from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.attachment import parse_attachments
from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import optional_text, parse_enum, require_bool, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import UserRef
from .model import AttendanceRecord, ClassSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


def parse_attendance(raw: Any) -> tuple[AttendanceRecord, ...]:
    """Validate an attendance sheet before it is written.

    Unknown statuses and missing references are rejected here so the
    attendance summary never has to guess about them.
    """

    if not isinstance(raw, list):
        raise ValidationError("attendance must be a list")

    records = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValidationError(f"attendance[{index}] must be an object")
        student = entry.get("student")
        if isinstance(student, dict):
            student = student.get("_id")
        records.append(
            AttendanceRecord(
                student=UserRef(user_id=require_non_empty(student, f"attendance[{index}].student")),
                status=parse_enum(
                    AttendanceStatus,
                    entry.get("status", AttendanceStatus.PRESENT.value),
                    f"attendance[{index}].status",
                ),
                recorded_by=require_non_empty(entry.get("recordedBy"), f"attendance[{index}].recordedBy"),
                notes=optional_text(entry.get("notes")),
            )
        )
    return tuple(records)


class SessionService:
    def __init__(self, sessions: SessionRepository, classes: ClassRepository):
        self._sessions = sessions
        self._classes = classes

    def list_sessions(
        self,
        *,
        class_id: Optional[str] = None,
        date: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> Sequence[ClassSession]:
        return self._sessions.list(
            class_id=class_id or None,
            date_from=parse_iso_datetime(date, "date") if date else None,
            is_completed=is_completed,
        )

    def get_session(self, session_id: str) -> ClassSession:
        class_session = self._sessions.get_by_id(session_id)
        if not class_session:
            raise NotFoundError("Session not found")
        return class_session

    def create_session(self, data: dict[str, Any]) -> ClassSession:
        class_id = data.get("class")
        if not class_id or not self._classes.get_by_id(str(class_id)):
            raise ValidationError("Invalid class")

        class_session = ClassSession(
            session_id="",
            class_id=str(class_id),
            date=parse_iso_datetime(data.get("date"), "date"),
            start_time=optional_text(data.get("startTime")),
            end_time=optional_text(data.get("endTime")),
            topic=optional_text(data.get("topic")),
            content=optional_text(data.get("content")),
            materials=parse_attachments(data.get("materials"), "materials"),
        )
        session_id = self._sessions.create(class_session)
        logger.info("created session %s for class %s", session_id, class_id)
        return self.get_session(session_id)

    def update_session(self, session_id: str, changes: dict[str, Any]) -> ClassSession:
        class_session = self.get_session(session_id)

        fields: dict[str, Any] = {}
        if "date" in changes:
            fields["date"] = parse_iso_datetime(changes["date"], "date")
        for key, attr in (("startTime", "start_time"), ("endTime", "end_time"), ("topic", "topic"),
                          ("content", "content"), ("notes", "notes")):
            if key in changes:
                fields[attr] = optional_text(changes[key])
        if "materials" in changes:
            fields["materials"] = parse_attachments(changes["materials"], "materials")
        if "isCompleted" in changes:
            fields["is_completed"] = require_bool(changes["isCompleted"], "isCompleted")

        if not self._sessions.save(replace(class_session, **fields)):
            raise NotFoundError("Session not found")
        return self.get_session(session_id)

    def delete_session(self, session_id: str) -> None:
        if not self._sessions.delete(session_id):
            raise NotFoundError("Session not found")
        logger.info("deleted session %s", session_id)

    def record_attendance(self, session_id: str, attendance: Any) -> ClassSession:
        """Replace the session's attendance sheet."""

        self.get_session(session_id)
        records = parse_attendance(attendance)
        if not self._sessions.replace_attendance(session_id, records):
            raise NotFoundError("Session not found")
        logger.info("recorded attendance for session %s (%d records)", session_id, len(records))
        return self.get_session(session_id)
