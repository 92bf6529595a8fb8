from __future__ import annotations

import csv
import io
from typing import Iterable

from .model import AttendanceSummary, GradeSummary

GRADE_COLUMNS = ["student_id", "first_name", "last_name", "email", "graded_assignments", "total_weight", "average_grade"]
ATTENDANCE_COLUMNS = ["student_id", "first_name", "last_name", "email", "total_sessions", "present", "absent", "late", "excused"]


def _write(columns: list[str], rows: Iterable[list]) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(columns)
    for row in rows:
        writer.writerow(row)
    # utf-8-sig so spreadsheet apps detect the encoding
    return out.getvalue().encode("utf-8-sig")


def grades_csv(summaries: Iterable[GradeSummary]) -> bytes:
    return _write(
        GRADE_COLUMNS,
        (
            [
                s.student.user_id,
                s.student.first_name or "",
                s.student.last_name or "",
                s.student.email or "",
                len(s.assignments),
                s.total_weight,
                f"{s.average_grade:.2f}",
            ]
            for s in summaries
        ),
    )


def attendance_csv(summaries: Iterable[AttendanceSummary]) -> bytes:
    return _write(
        ATTENDANCE_COLUMNS,
        (
            [
                s.student.user_id,
                s.student.first_name or "",
                s.student.last_name or "",
                s.student.email or "",
                s.total_sessions,
                s.present,
                s.absent,
                s.late,
                s.excused,
            ]
            for s in summaries
        ),
    )
