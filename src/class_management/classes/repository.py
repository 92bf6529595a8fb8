from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Semester
from .model import Enrollment, SchoolClass


class ClassRepository(Protocol):
    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        raise NotImplementedError

    def list(
        self,
        *,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
        academic_year: Optional[str] = None,
        semester: Optional[Semester] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[SchoolClass]:
        """Classes matching the filters, newest first."""

        raise NotImplementedError

    def create(self, school_class: SchoolClass) -> str:
        """Insert a new class; ``class_id`` on the argument is ignored.

        Returns class_id.
        """

        raise NotImplementedError

    def save(self, school_class: SchoolClass) -> bool:
        """Persist the class's own fields; enrollments are left untouched."""

        raise NotImplementedError

    def add_enrollment(self, class_id: str, enrollment: Enrollment, *, max_students: int) -> bool:
        """Enroll a student in one write, only if not enrolled and below ``max_students``."""

        raise NotImplementedError

    def remove_enrollment(self, class_id: str, student_id: str) -> bool:
        raise NotImplementedError

    def delete(self, class_id: str) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
