from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AssignmentType
from .model import Assignment, Grade, Submission


class AssignmentRepository(Protocol):
    def get_by_id(self, assignment_id: str) -> Optional[Assignment]:
        raise NotImplementedError

    def list(
        self,
        *,
        class_id: Optional[str] = None,
        assignment_type: Optional[AssignmentType] = None,
        is_published: Optional[bool] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[Assignment]:
        """Assignments matching the filters, earliest due date first."""

        raise NotImplementedError

    def create(self, assignment: Assignment) -> str:
        raise NotImplementedError

    def save(self, assignment: Assignment) -> bool:
        """Persist the assignment's own fields.

        Embedded submissions are left untouched; they only change through
        ``add_submission`` and ``grade_submission``.
        """

        raise NotImplementedError

    def add_submission(self, assignment_id: str, submission: Submission) -> bool:
        """Append a submission unless the student already has one.

        The check and the append happen in one write. Returns False when the
        assignment is missing or the student already submitted.
        """

        raise NotImplementedError

    def grade_submission(self, assignment_id: str, submission_id: str, grade: Grade) -> bool:
        """Set the grade of one submission and mark it graded, in place."""

        raise NotImplementedError

    def delete(self, assignment_id: str) -> bool:
        raise NotImplementedError
