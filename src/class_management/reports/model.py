from __future__ import annotations

from dataclasses import dataclass

from ..users.model import UserRef


@dataclass(frozen=True)
class GradeLine:
    """One scored submission inside a student's grade summary."""

    assignment_title: str
    score: float
    max_score: float
    weight: float
    percentage: float

    def to_dict(self) -> dict:
        return {
            "assignmentTitle": self.assignment_title,
            "score": self.score,
            "maxScore": self.max_score,
            "weight": self.weight,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class GradeSummary:
    """Read-model: weighted grade average of one student over a class.

    ``average_grade`` is exactly 0 when the student has no scored work; it is
    a default, not a missing-data marker.
    """

    student: UserRef
    assignments: tuple[GradeLine, ...]
    total_score: float
    total_weight: float
    average_grade: float

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "assignments": [line.to_dict() for line in self.assignments],
            "totalScore": self.total_score,
            "totalWeight": self.total_weight,
            "averageGrade": self.average_grade,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model: attendance tallies of one student over a class."""

    student: UserRef
    total_sessions: int
    present: int
    absent: int
    late: int
    excused: int

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "totalSessions": self.total_sessions,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "excused": self.excused,
        }


@dataclass(frozen=True)
class DashboardStats:
    total_classes: int
    total_students: int
    total_teachers: int
    active_assignments: int
    average_grade: float

    def to_dict(self) -> dict:
        return {
            "totalClasses": self.total_classes,
            "totalStudents": self.total_students,
            "totalTeachers": self.total_teachers,
            "activeAssignments": self.active_assignments,
            "averageGrade": self.average_grade,
        }
