from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.attachment import Attachment
from ..common.datetime_utils import isoformat
from ..core.constants import DEFAULT_MAX_SCORE, DEFAULT_WEIGHT
from ..core.enums import AssignmentType, SubmissionStatus
from ..users.model import UserRef


@dataclass(frozen=True)
class Grade:
    score: Optional[float] = None
    feedback: Optional[str] = None
    graded_by: Optional[str] = None
    graded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "feedback": self.feedback,
            "gradedBy": self.graded_by,
            "gradedAt": isoformat(self.graded_at),
        }


@dataclass(frozen=True)
class Submission:
    """A student's response to an assignment, optionally carrying a grade."""

    submission_id: str
    student: UserRef
    status: SubmissionStatus = SubmissionStatus.NOT_SUBMITTED
    submitted_at: Optional[datetime] = None
    files: tuple[Attachment, ...] = ()
    grade: Optional[Grade] = None

    @property
    def score(self) -> Optional[float]:
        """The numeric score, or None when the submission is ungraded."""
        if self.grade is None:
            return None
        score = self.grade.score
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            return None
        return score

    def to_dict(self) -> dict:
        return {
            "_id": self.submission_id,
            "student": self.student.to_dict(),
            "submittedAt": isoformat(self.submitted_at),
            "files": [f.to_dict() for f in self.files],
            "grade": self.grade.to_dict() if self.grade else None,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Assignment:
    """Domain entity: an assignment of a class with its embedded submissions."""

    assignment_id: str
    title: str
    class_id: str
    type: AssignmentType
    due_date: datetime
    max_score: float = DEFAULT_MAX_SCORE
    weight: float = DEFAULT_WEIGHT
    description: Optional[str] = None
    instructions: Optional[str] = None
    attachments: tuple[Attachment, ...] = ()
    submissions: tuple[Submission, ...] = ()
    is_published: bool = False
    allow_late_submission: bool = False
    late_penalty: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def submission_for(self, student_id: str) -> Optional[Submission]:
        for submission in self.submissions:
            if submission.student.user_id == student_id:
                return submission
        return None

    def to_dict(self) -> dict:
        return {
            "_id": self.assignment_id,
            "title": self.title,
            "description": self.description,
            "class": self.class_id,
            "type": self.type.value,
            "dueDate": isoformat(self.due_date),
            "maxScore": self.max_score,
            "weight": self.weight,
            "instructions": self.instructions,
            "attachments": [a.to_dict() for a in self.attachments],
            "submissions": [s.to_dict() for s in self.submissions],
            "isPublished": self.is_published,
            "allowLateSubmission": self.allow_late_submission,
            "latePenalty": self.late_penalty,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
