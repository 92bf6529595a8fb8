from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.constants import DEFAULT_MAX_STUDENTS
from ..core.enums import DayOfWeek, Semester


@dataclass(frozen=True)
class Enrollment:
    student_id: str
    enrolled_at: Optional[datetime] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "student": self.student_id,
            "enrolledAt": isoformat(self.enrolled_at),
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class ClassSchedule:
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    room: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "dayOfWeek": self.day_of_week.value if self.day_of_week else None,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "room": self.room,
        }


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a class taught by one teacher to enrolled students."""

    class_id: str
    name: str
    subject: str
    teacher_id: str
    academic_year: str
    semester: Semester
    description: Optional[str] = None
    schedule: ClassSchedule = ClassSchedule()
    students: tuple[Enrollment, ...] = ()
    is_active: bool = True
    max_students: int = DEFAULT_MAX_STUDENTS
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_enrolled(self, student_id: str) -> bool:
        return any(e.student_id == student_id for e in self.students)

    @property
    def is_full(self) -> bool:
        return len(self.students) >= self.max_students

    def to_dict(self) -> dict:
        return {
            "_id": self.class_id,
            "name": self.name,
            "description": self.description,
            "subject": self.subject,
            "teacher": self.teacher_id,
            "students": [e.to_dict() for e in self.students],
            "schedule": self.schedule.to_dict(),
            "academicYear": self.academic_year,
            "semester": self.semester.value,
            "isActive": self.is_active,
            "maxStudents": self.max_students,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
