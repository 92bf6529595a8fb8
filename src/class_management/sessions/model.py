from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.attachment import Attachment
from ..common.datetime_utils import isoformat
from ..core.enums import AttendanceStatus
from ..users.model import UserRef


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's presence status for one class session."""

    student: UserRef
    status: AttendanceStatus
    recorded_by: str
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "status": getattr(self.status, "value", self.status),
            "notes": self.notes,
            "recordedBy": self.recorded_by,
        }


@dataclass(frozen=True)
class ClassSession:
    """Domain entity: one meeting of a class, with its attendance sheet."""

    session_id: str
    class_id: str
    date: datetime
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    topic: Optional[str] = None
    content: Optional[str] = None
    materials: tuple[Attachment, ...] = ()
    attendance: tuple[AttendanceRecord, ...] = ()
    notes: Optional[str] = None
    is_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "_id": self.session_id,
            "class": self.class_id,
            "date": isoformat(self.date),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "topic": self.topic,
            "content": self.content,
            "materials": [m.to_dict() for m in self.materials],
            "attendance": [a.to_dict() for a in self.attendance],
            "notes": self.notes,
            "isCompleted": self.is_completed,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
