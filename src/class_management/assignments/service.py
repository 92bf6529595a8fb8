from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.attachment import parse_attachments
from ..common.datetime_utils import now_utc, parse_iso_datetime
from ..common.validators import (
    optional_text,
    parse_enum,
    require_bool,
    require_non_empty,
    require_number,
)
from ..core.constants import (
    DEFAULT_MAX_SCORE,
    DEFAULT_WEIGHT,
    MAX_LATE_PENALTY,
    MAX_SCORE,
    MAX_WEIGHT,
    MIN_LATE_PENALTY,
    MIN_SCORE,
    MIN_WEIGHT,
)
from ..core.enums import AssignmentType, SubmissionStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import UserRef
from .model import Assignment, Grade, Submission
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


def _max_score(value: Any) -> float:
    # A non-positive maxScore would make every percentage non-finite.
    return require_number(value, "maxScore", minimum=0, exclusive_minimum=True)


def _weight(value: Any) -> float:
    return require_number(value, "weight", minimum=MIN_WEIGHT, maximum=MAX_WEIGHT)


def _late_penalty(value: Any) -> float:
    return require_number(value, "latePenalty", minimum=MIN_LATE_PENALTY, maximum=MAX_LATE_PENALTY)


class AssignmentService:
    def __init__(self, assignments: AssignmentRepository, classes: ClassRepository):
        self._assignments = assignments
        self._classes = classes

    def list_assignments(
        self,
        *,
        class_id: Optional[str] = None,
        assignment_type: Optional[str] = None,
        is_published: Optional[bool] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[Assignment]:
        return self._assignments.list(
            class_id=class_id or None,
            assignment_type=parse_enum(AssignmentType, assignment_type, "type") if assignment_type else None,
            is_published=is_published,
            student_id=student_id or None,
        )

    def get_assignment(self, assignment_id: str) -> Assignment:
        assignment = self._assignments.get_by_id(assignment_id)
        if not assignment:
            raise NotFoundError("Assignment not found")
        return assignment

    def create_assignment(self, data: dict[str, Any]) -> Assignment:
        class_id = data.get("class")
        if not class_id or not self._classes.get_by_id(str(class_id)):
            raise ValidationError("Invalid class")

        max_score = data.get("maxScore")
        weight = data.get("weight")
        late_penalty = data.get("latePenalty")
        allow_late = data.get("allowLateSubmission")

        assignment = Assignment(
            assignment_id="",
            title=require_non_empty(data.get("title"), "title"),
            class_id=str(class_id),
            type=parse_enum(AssignmentType, data.get("type"), "type"),
            due_date=parse_iso_datetime(data.get("dueDate"), "dueDate"),
            max_score=_max_score(max_score) if max_score is not None else DEFAULT_MAX_SCORE,
            weight=_weight(weight) if weight is not None else DEFAULT_WEIGHT,
            description=optional_text(data.get("description")),
            instructions=optional_text(data.get("instructions")),
            attachments=parse_attachments(data.get("attachments")),
            allow_late_submission=require_bool(allow_late, "allowLateSubmission") if allow_late is not None else False,
            late_penalty=_late_penalty(late_penalty) if late_penalty is not None else 0,
        )

        assignment_id = self._assignments.create(assignment)
        logger.info("created assignment %s (%s) for class %s", assignment_id, assignment.title, class_id)
        return self.get_assignment(assignment_id)

    def update_assignment(self, assignment_id: str, changes: dict[str, Any]) -> Assignment:
        assignment = self.get_assignment(assignment_id)

        fields: dict[str, Any] = {}
        if "title" in changes:
            fields["title"] = require_non_empty(changes["title"], "title")
        if "description" in changes:
            fields["description"] = optional_text(changes["description"])
        if "type" in changes:
            fields["type"] = parse_enum(AssignmentType, changes["type"], "type")
        if "dueDate" in changes:
            fields["due_date"] = parse_iso_datetime(changes["dueDate"], "dueDate")
        if "maxScore" in changes:
            fields["max_score"] = _max_score(changes["maxScore"])
        if "weight" in changes:
            fields["weight"] = _weight(changes["weight"])
        if "instructions" in changes:
            fields["instructions"] = optional_text(changes["instructions"])
        if "attachments" in changes:
            fields["attachments"] = parse_attachments(changes["attachments"])
        if "isPublished" in changes:
            fields["is_published"] = require_bool(changes["isPublished"], "isPublished")
        if "allowLateSubmission" in changes:
            fields["allow_late_submission"] = require_bool(changes["allowLateSubmission"], "allowLateSubmission")
        if "latePenalty" in changes:
            fields["late_penalty"] = _late_penalty(changes["latePenalty"])

        if not self._assignments.save(replace(assignment, **fields)):
            raise NotFoundError("Assignment not found")
        return self.get_assignment(assignment_id)

    def delete_assignment(self, assignment_id: str) -> None:
        if not self._assignments.delete(assignment_id):
            raise NotFoundError("Assignment not found")
        logger.info("deleted assignment %s", assignment_id)

    def submit(
        self,
        assignment_id: str,
        *,
        student_id: str,
        files: Any = None,
        now: Optional[datetime] = None,
    ) -> Assignment:
        now = now or now_utc()
        assignment = self.get_assignment(assignment_id)

        if not assignment.is_published:
            raise ValidationError("Assignment is not published")
        if assignment.submission_for(student_id):
            raise ValidationError("Assignment already submitted")

        status = SubmissionStatus.SUBMITTED
        if now > assignment.due_date:
            if not assignment.allow_late_submission:
                raise ValidationError("Assignment is past due")
            status = SubmissionStatus.LATE

        submission = Submission(
            submission_id="",
            student=UserRef(user_id=student_id),
            status=status,
            submitted_at=now,
            files=parse_attachments(files, "files"),
        )
        if not self._assignments.add_submission(assignment_id, submission):
            # another request changed the submissions in between
            if self.get_assignment(assignment_id).submission_for(student_id):
                raise ValidationError("Assignment already submitted")
            raise NotFoundError("Assignment not found")
        logger.info("student %s submitted assignment %s (%s)", student_id, assignment_id, status.value)
        return self.get_assignment(assignment_id)

    def grade(
        self,
        assignment_id: str,
        submission_id: str,
        *,
        score: Any,
        feedback: Optional[str],
        graded_by: str,
        now: Optional[datetime] = None,
    ) -> Assignment:
        assignment = self.get_assignment(assignment_id)

        if not any(s.submission_id == submission_id for s in assignment.submissions):
            raise NotFoundError("Submission not found")

        grade = Grade(
            score=require_number(score, "score", minimum=MIN_SCORE, maximum=MAX_SCORE),
            feedback=optional_text(feedback),
            graded_by=graded_by,
            graded_at=now or now_utc(),
        )
        if not self._assignments.grade_submission(assignment_id, submission_id, grade):
            raise NotFoundError("Submission not found")
        logger.info("graded submission %s of assignment %s", submission_id, assignment_id)
        return self.get_assignment(assignment_id)
