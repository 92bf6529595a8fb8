from __future__ import annotations

from typing import Optional, Sequence

from pymongo import ASCENDING

from ..common.attachment import Attachment
from ..common.datetime_utils import now_utc
from ..core.enums import AssignmentType, SubmissionStatus
from ..database.connection import DatabaseConnection
from ..database.mongo_base import (
    ASSIGNMENTS,
    id_str,
    optional_reference_id,
    sub_id,
    to_object_id,
    to_reference_id,
)
from ..users.model import UserRef
from .model import Assignment, Grade, Submission
from .repository import AssignmentRepository


def _attachments(raw) -> tuple[Attachment, ...]:
    return tuple(
        Attachment(name=a.get("name"), file_url=a.get("fileUrl"), file_type=a.get("fileType"))
        for a in raw or []
    )


def _attachment_docs(items: tuple[Attachment, ...]) -> list[dict]:
    return [{"name": a.name, "fileUrl": a.file_url, "fileType": a.file_type} for a in items]


class MongoAssignmentRepository(AssignmentRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _assignments(self):
        return self._conn.collection(ASSIGNMENTS)

    @staticmethod
    def _submission_to_model(doc: dict) -> Submission:
        grade = doc.get("grade")
        return Submission(
            submission_id=id_str(doc.get("_id")) or "",
            student=UserRef(user_id=id_str(doc.get("student")) or ""),
            status=SubmissionStatus(doc.get("status", SubmissionStatus.NOT_SUBMITTED.value)),
            submitted_at=doc.get("submittedAt"),
            files=_attachments(doc.get("files")),
            grade=(
                Grade(
                    score=grade.get("score"),
                    feedback=grade.get("feedback"),
                    graded_by=id_str(grade.get("gradedBy")),
                    graded_at=grade.get("gradedAt"),
                )
                if grade
                else None
            ),
        )

    @classmethod
    def _to_model(cls, doc: dict) -> Assignment:
        return Assignment(
            assignment_id=str(doc["_id"]),
            title=doc.get("title", ""),
            class_id=id_str(doc.get("class")) or "",
            type=AssignmentType(doc["type"]),
            due_date=doc["dueDate"],
            max_score=doc.get("maxScore", 100),
            weight=doc.get("weight", 1),
            description=doc.get("description"),
            instructions=doc.get("instructions"),
            attachments=_attachments(doc.get("attachments")),
            submissions=tuple(cls._submission_to_model(s) for s in doc.get("submissions") or []),
            is_published=bool(doc.get("isPublished", False)),
            allow_late_submission=bool(doc.get("allowLateSubmission", False)),
            late_penalty=doc.get("latePenalty", 0),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    @staticmethod
    def _submission_to_document(submission: Submission) -> dict:
        doc = {
            "student": to_reference_id(submission.student.user_id, "student"),
            "submittedAt": submission.submitted_at,
            "files": _attachment_docs(submission.files),
            "status": submission.status.value,
        }
        if submission.submission_id:
            doc["_id"] = to_reference_id(submission.submission_id, "submission")
        sub_id(doc)
        if submission.grade is not None:
            doc["grade"] = MongoAssignmentRepository._grade_to_document(submission.grade)
        return doc

    @staticmethod
    def _grade_to_document(grade: Grade) -> dict:
        return {
            "score": grade.score,
            "feedback": grade.feedback,
            "gradedBy": optional_reference_id(grade.graded_by, "gradedBy"),
            "gradedAt": grade.graded_at,
        }

    @classmethod
    def _to_document(cls, assignment: Assignment) -> dict:
        return {
            "title": assignment.title,
            "description": assignment.description,
            "class": to_reference_id(assignment.class_id, "class"),
            "type": assignment.type.value,
            "dueDate": assignment.due_date,
            "maxScore": assignment.max_score,
            "weight": assignment.weight,
            "instructions": assignment.instructions,
            "attachments": _attachment_docs(assignment.attachments),
            "submissions": [cls._submission_to_document(s) for s in assignment.submissions],
            "isPublished": assignment.is_published,
            "allowLateSubmission": assignment.allow_late_submission,
            "latePenalty": assignment.late_penalty,
        }

    def get_by_id(self, assignment_id: str) -> Optional[Assignment]:
        doc = self._assignments.find_one({"_id": to_object_id(assignment_id, what="Assignment")})
        return self._to_model(doc) if doc else None

    def list(
        self,
        *,
        class_id: Optional[str] = None,
        assignment_type: Optional[AssignmentType] = None,
        is_published: Optional[bool] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[Assignment]:
        query: dict = {}
        if class_id:
            query["class"] = to_reference_id(class_id, "class")
        if assignment_type is not None:
            query["type"] = assignment_type.value
        if is_published is not None:
            query["isPublished"] = is_published
        if student_id:
            query["submissions.student"] = to_reference_id(student_id, "student")

        cursor = self._assignments.find(query).sort("dueDate", ASCENDING)
        return [self._to_model(doc) for doc in cursor]

    def create(self, assignment: Assignment) -> str:
        doc = self._to_document(assignment)
        now = now_utc()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        return str(self._assignments.insert_one(doc).inserted_id)

    def save(self, assignment: Assignment) -> bool:
        doc = self._to_document(assignment)
        del doc["submissions"]
        doc["updatedAt"] = now_utc()
        result = self._assignments.update_one(
            {"_id": to_object_id(assignment.assignment_id, what="Assignment")}, {"$set": doc}
        )
        return result.matched_count > 0

    def add_submission(self, assignment_id: str, submission: Submission) -> bool:
        doc = self._submission_to_document(submission)
        result = self._assignments.update_one(
            {
                "_id": to_object_id(assignment_id, what="Assignment"),
                "submissions.student": {"$ne": doc["student"]},
            },
            {"$push": {"submissions": doc}, "$set": {"updatedAt": now_utc()}},
        )
        return result.matched_count > 0

    def grade_submission(self, assignment_id: str, submission_id: str, grade: Grade) -> bool:
        result = self._assignments.update_one(
            {
                "_id": to_object_id(assignment_id, what="Assignment"),
                "submissions._id": to_object_id(submission_id, what="Submission"),
            },
            {
                "$set": {
                    "submissions.$.grade": self._grade_to_document(grade),
                    "submissions.$.status": SubmissionStatus.GRADED.value,
                    "updatedAt": now_utc(),
                }
            },
        )
        return result.matched_count > 0

    def delete(self, assignment_id: str) -> bool:
        result = self._assignments.delete_one({"_id": to_object_id(assignment_id, what="Assignment")})
        return result.deleted_count > 0
