from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import (
    optional_text,
    parse_enum,
    require_bool,
    require_int,
    require_non_empty,
)
from ..core.constants import DEFAULT_MAX_STUDENTS
from ..core.enums import DayOfWeek, Role, Semester
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import ClassSchedule, Enrollment, SchoolClass
from .repository import ClassRepository

logger = logging.getLogger(__name__)


def _parse_schedule(raw: Any) -> ClassSchedule:
    if raw is None:
        return ClassSchedule()
    if not isinstance(raw, dict):
        raise ValidationError("schedule must be an object")
    day = raw.get("dayOfWeek")
    return ClassSchedule(
        day_of_week=parse_enum(DayOfWeek, day, "schedule.dayOfWeek") if day else None,
        start_time=optional_text(raw.get("startTime")),
        end_time=optional_text(raw.get("endTime")),
        room=optional_text(raw.get("room")),
    )


class ClassService:
    def __init__(self, classes: ClassRepository, users: UserRepository):
        self._classes = classes
        self._users = users

    def list_classes(
        self,
        *,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
        academic_year: Optional[str] = None,
        semester: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[SchoolClass]:
        return self._classes.list(
            teacher_id=teacher_id or None,
            student_id=student_id or None,
            academic_year=academic_year or None,
            semester=parse_enum(Semester, semester, "semester") if semester else None,
            is_active=is_active,
        )

    def get_class(self, class_id: str) -> SchoolClass:
        school_class = self._classes.get_by_id(class_id)
        if not school_class:
            raise NotFoundError("Class not found")
        return school_class

    def create_class(self, data: dict[str, Any]) -> SchoolClass:
        teacher_id = data.get("teacher")
        teacher = self._users.get_by_id(str(teacher_id)) if teacher_id else None
        if not teacher or teacher.role != Role.TEACHER:
            raise ValidationError("Invalid teacher")

        max_students = data.get("maxStudents")
        school_class = SchoolClass(
            class_id="",
            name=require_non_empty(data.get("name"), "name"),
            subject=require_non_empty(data.get("subject"), "subject"),
            teacher_id=teacher.user_id,
            academic_year=require_non_empty(data.get("academicYear"), "academicYear"),
            semester=parse_enum(Semester, data.get("semester"), "semester"),
            description=optional_text(data.get("description")),
            schedule=_parse_schedule(data.get("schedule")),
            max_students=(
                require_int(max_students, "maxStudents", minimum=1) if max_students is not None else DEFAULT_MAX_STUDENTS
            ),
        )

        class_id = self._classes.create(school_class)
        logger.info("created class %s (%s) for teacher %s", class_id, school_class.name, teacher.user_id)
        return self.get_class(class_id)

    def update_class(self, class_id: str, changes: dict[str, Any]) -> SchoolClass:
        school_class = self.get_class(class_id)

        fields: dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "name")
        if "description" in changes:
            fields["description"] = optional_text(changes["description"])
        if "subject" in changes:
            fields["subject"] = require_non_empty(changes["subject"], "subject")
        if "schedule" in changes:
            fields["schedule"] = _parse_schedule(changes["schedule"])
        if "academicYear" in changes:
            fields["academic_year"] = require_non_empty(changes["academicYear"], "academicYear")
        if "semester" in changes:
            fields["semester"] = parse_enum(Semester, changes["semester"], "semester")
        if "maxStudents" in changes:
            fields["max_students"] = require_int(changes["maxStudents"], "maxStudents", minimum=1)
        if "isActive" in changes:
            fields["is_active"] = require_bool(changes["isActive"], "isActive")

        if not self._classes.save(replace(school_class, **fields)):
            raise NotFoundError("Class not found")
        return self.get_class(class_id)

    def delete_class(self, class_id: str) -> None:
        if not self._classes.delete(class_id):
            raise NotFoundError("Class not found")
        logger.info("deleted class %s", class_id)

    def enroll(self, class_id: str, student_id: Optional[str]) -> SchoolClass:
        school_class = self.get_class(class_id)
        student_id = require_non_empty(student_id, "studentId")

        if school_class.is_enrolled(student_id):
            raise ValidationError("Student already enrolled")
        if school_class.is_full:
            raise ValidationError("Class is full")

        enrollment = Enrollment(student_id=student_id, enrolled_at=now_utc())
        if not self._classes.add_enrollment(class_id, enrollment, max_students=school_class.max_students):
            current = self.get_class(class_id)
            if current.is_enrolled(student_id):
                raise ValidationError("Student already enrolled")
            raise ValidationError("Class is full")
        logger.info("enrolled student %s in class %s", student_id, class_id)
        return self.get_class(class_id)

    def unenroll(self, class_id: str, student_id: str) -> SchoolClass:
        if not self._classes.remove_enrollment(class_id, student_id):
            raise NotFoundError("Class not found")
        logger.info("unenrolled student %s from class %s", student_id, class_id)
        return self.get_class(class_id)
