from __future__ import annotations

from typing import Optional, Sequence

from pymongo import DESCENDING

from ..common.datetime_utils import now_utc
from ..core.enums import DayOfWeek, Semester
from ..database.connection import DatabaseConnection
from ..database.mongo_base import CLASSES, id_str, to_object_id, to_reference_id
from .model import ClassSchedule, Enrollment, SchoolClass
from .repository import ClassRepository


class MongoClassRepository(ClassRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _classes(self):
        return self._conn.collection(CLASSES)

    @staticmethod
    def _to_model(doc: dict) -> SchoolClass:
        schedule = doc.get("schedule") or {}
        day = schedule.get("dayOfWeek")
        return SchoolClass(
            class_id=str(doc["_id"]),
            name=doc.get("name", ""),
            subject=doc.get("subject", ""),
            teacher_id=id_str(doc.get("teacher")) or "",
            academic_year=doc.get("academicYear", ""),
            semester=Semester(doc["semester"]),
            description=doc.get("description"),
            schedule=ClassSchedule(
                day_of_week=DayOfWeek(day) if day else None,
                start_time=schedule.get("startTime"),
                end_time=schedule.get("endTime"),
                room=schedule.get("room"),
            ),
            students=tuple(
                Enrollment(
                    student_id=id_str(e.get("student")) or "",
                    enrolled_at=e.get("enrolledAt"),
                    is_active=bool(e.get("isActive", True)),
                )
                for e in doc.get("students") or []
            ),
            is_active=bool(doc.get("isActive", True)),
            max_students=int(doc.get("maxStudents", 30)),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    @staticmethod
    def _to_document(school_class: SchoolClass) -> dict:
        s = school_class.schedule
        return {
            "name": school_class.name,
            "description": school_class.description,
            "subject": school_class.subject,
            "teacher": to_reference_id(school_class.teacher_id, "teacher"),
            "students": [
                {
                    "student": to_reference_id(e.student_id, "studentId"),
                    "enrolledAt": e.enrolled_at,
                    "isActive": e.is_active,
                }
                for e in school_class.students
            ],
            "schedule": {
                "dayOfWeek": s.day_of_week.value if s.day_of_week else None,
                "startTime": s.start_time,
                "endTime": s.end_time,
                "room": s.room,
            },
            "academicYear": school_class.academic_year,
            "semester": school_class.semester.value,
            "isActive": school_class.is_active,
            "maxStudents": school_class.max_students,
        }

    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        doc = self._classes.find_one({"_id": to_object_id(class_id, what="Class")})
        return self._to_model(doc) if doc else None

    def list(
        self,
        *,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
        academic_year: Optional[str] = None,
        semester: Optional[Semester] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[SchoolClass]:
        query: dict = {}
        if teacher_id:
            query["teacher"] = to_reference_id(teacher_id, "teacher")
        if student_id:
            query["students.student"] = to_reference_id(student_id, "student")
        if academic_year:
            query["academicYear"] = academic_year
        if semester is not None:
            query["semester"] = semester.value
        if is_active is not None:
            query["isActive"] = is_active

        cursor = self._classes.find(query).sort("createdAt", DESCENDING)
        return [self._to_model(doc) for doc in cursor]

    def create(self, school_class: SchoolClass) -> str:
        doc = self._to_document(school_class)
        now = now_utc()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        return str(self._classes.insert_one(doc).inserted_id)

    def save(self, school_class: SchoolClass) -> bool:
        doc = self._to_document(school_class)
        del doc["students"]
        doc["updatedAt"] = now_utc()
        result = self._classes.update_one({"_id": to_object_id(school_class.class_id, what="Class")}, {"$set": doc})
        return result.matched_count > 0

    def add_enrollment(self, class_id: str, enrollment: Enrollment, *, max_students: int) -> bool:
        student = to_reference_id(enrollment.student_id, "studentId")
        result = self._classes.update_one(
            {
                "_id": to_object_id(class_id, what="Class"),
                "students.student": {"$ne": student},
                # the array holds fewer than max_students entries
                f"students.{max(max_students, 1) - 1}": {"$exists": False},
            },
            {
                "$push": {
                    "students": {"student": student, "enrolledAt": enrollment.enrolled_at, "isActive": enrollment.is_active}
                },
                "$set": {"updatedAt": now_utc()},
            },
        )
        return result.matched_count > 0

    def remove_enrollment(self, class_id: str, student_id: str) -> bool:
        result = self._classes.update_one(
            {"_id": to_object_id(class_id, what="Class")},
            {"$pull": {"students": {"student": to_reference_id(student_id, "studentId")}}, "$set": {"updatedAt": now_utc()}},
        )
        return result.matched_count > 0

    def delete(self, class_id: str) -> bool:
        result = self._classes.delete_one({"_id": to_object_id(class_id, what="Class")})
        return result.deleted_count > 0

    def count(self) -> int:
        return self._classes.count_documents({})
