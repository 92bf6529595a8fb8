from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role stored on the user document."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class AssignmentType(str, Enum):
    HOMEWORK = "homework"
    TEST = "test"
    QUIZ = "quiz"
    PROJECT = "project"
    EXAM = "exam"


class SubmissionStatus(str, Enum):
    """Lifecycle of a student's submission to an assignment."""

    SUBMITTED = "submitted"
    GRADED = "graded"
    LATE = "late"
    NOT_SUBMITTED = "not_submitted"


class AttendanceStatus(str, Enum):
    """Presence status recorded for one student in one class session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class Semester(str, Enum):
    FALL = "fall"
    SPRING = "spring"
    SUMMER = "summer"


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
