from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from ...core.enums import AttendanceStatus
from ...core.exceptions import DataIntegrityError
from ...sessions.model import ClassSession
from ...users.model import UserRef
from ..model import AttendanceSummary
from .base import SummaryAggregator, student_key


@dataclass
class _AttendanceAccumulator:
    student: UserRef
    counts: Counter = field(default_factory=Counter)

    def freeze(self) -> AttendanceSummary:
        return AttendanceSummary(
            student=self.student,
            total_sessions=sum(self.counts.values()),
            present=self.counts[AttendanceStatus.PRESENT],
            absent=self.counts[AttendanceStatus.ABSENT],
            late=self.counts[AttendanceStatus.LATE],
            excused=self.counts[AttendanceStatus.EXCUSED],
        )


class StatusCountAggregator(SummaryAggregator[ClassSession, AttendanceSummary]):
    """Count attendance records per student and status.

    Each record bumps exactly one status counter; repeated appearances of the
    same student accumulate, so totalSessions always equals the sum of the
    four counters.
    """

    def aggregate(self, records: Iterable[ClassSession]) -> list[AttendanceSummary]:
        summary_map: dict[str, _AttendanceAccumulator] = {}

        for class_session in records:
            for record in class_session.attendance:
                where = f"attendance record in session {class_session.session_id}"
                key = student_key(record.student, where=where)
                if not isinstance(record.status, AttendanceStatus):
                    raise DataIntegrityError(f"{where} has unrecognized status {record.status!r}")

                acc = summary_map.get(key)
                if acc is None:
                    acc = _AttendanceAccumulator(student=record.student)
                    summary_map[key] = acc
                acc.counts[record.status] += 1

        return [acc.freeze() for acc in summary_map.values()]
