from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, TypeVar

from ..assignments.repository import AssignmentRepository
from ..classes.repository import ClassRepository
from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..sessions.repository import SessionRepository
from ..users.repository import UserRepository
from .aggregators.attendance_aggregator import StatusCountAggregator
from .aggregators.base import SummaryAggregator
from .aggregators.grade_aggregator import WeightedGradeAggregator
from .model import AttendanceSummary, DashboardStats, GradeSummary

T = TypeVar("T", GradeSummary, AttendanceSummary)


class ReportService:
    """Use case: per-class grade and attendance summaries, dashboard counters.

    Fetching is done here; the folding itself is delegated to aggregators that
    only ever see already-materialized records.
    """

    def __init__(
        self,
        assignments: AssignmentRepository,
        sessions: SessionRepository,
        classes: ClassRepository,
        users: UserRepository,
        *,
        grade_aggregator: Optional[SummaryAggregator] = None,
        attendance_aggregator: Optional[SummaryAggregator] = None,
    ):
        self._assignments = assignments
        self._sessions = sessions
        self._classes = classes
        self._users = users
        self._grades = grade_aggregator or WeightedGradeAggregator()
        self._attendance = attendance_aggregator or StatusCountAggregator()

    def _require_class(self, class_id: str) -> None:
        if not self._classes.get_by_id(class_id):
            raise NotFoundError("Class not found")

    def _populate(self, summaries: list[T]) -> list[T]:
        refs = self._users.get_refs(s.student.user_id for s in summaries)
        return [replace(s, student=refs.get(s.student.user_id, s.student)) for s in summaries]

    def class_grade_summary(self, class_id: str) -> list[GradeSummary]:
        self._require_class(class_id)
        assignments = self._assignments.list(class_id=class_id, is_published=True)
        return self._populate(self._grades.aggregate(assignments))

    def class_attendance_summary(
        self,
        class_id: str,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[AttendanceSummary]:
        """Attendance tallies; the date range applies only when both ends are given."""

        self._require_class(class_id)
        date_from: Optional[datetime] = None
        date_to: Optional[datetime] = None
        if start_date and end_date:
            date_from = parse_iso_datetime(start_date, "startDate")
            date_to = parse_iso_datetime(end_date, "endDate")

        sessions = self._sessions.list(class_id=class_id, date_from=date_from, date_to=date_to, oldest_first=True)
        return self._populate(self._attendance.aggregate(sessions))

    def dashboard_stats(self) -> DashboardStats:
        published = self._assignments.list(is_published=True)
        graded = [s for s in self._grades.aggregate(published) if s.total_weight > 0]
        average = sum(s.average_grade for s in graded) / len(graded) if graded else 0

        return DashboardStats(
            total_classes=self._classes.count(),
            total_students=len(self._users.list(role=Role.STUDENT)),
            total_teachers=len(self._users.list(role=Role.TEACHER)),
            active_assignments=len(published),
            average_grade=average,
        )
