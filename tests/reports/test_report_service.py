from __future__ import annotations

from datetime import datetime

import pytest

from class_management.assignments.model import Assignment, Grade, Submission
from class_management.core.enums import AssignmentType, AttendanceStatus, SubmissionStatus
from class_management.core.exceptions import NotFoundError
from class_management.reports.export import attendance_csv, grades_csv
from class_management.sessions.model import AttendanceRecord, ClassSession
from fakes import student


def _graded(student_id, score):
    return Submission(
        submission_id=f"sub-{student_id}",
        student=student(student_id),
        status=SubmissionStatus.GRADED,
        grade=Grade(score=score, graded_by="t1"),
    )


def _assignment(assignment_id, *, class_id="c-math", published=True, submissions=()):
    return Assignment(
        assignment_id=assignment_id,
        title=f"Homework {assignment_id}",
        class_id=class_id,
        type=AssignmentType.HOMEWORK,
        due_date=datetime(2026, 2, 1),
        submissions=tuple(submissions),
        is_published=published,
    )


def _session(session_id, day, *records, class_id="c-math"):
    return ClassSession(
        session_id=session_id,
        class_id=class_id,
        date=datetime(2026, 2, day),
        attendance=tuple(AttendanceRecord(student=student(sid), status=st, recorded_by="t1") for sid, st in records),
    )


def test_grade_summary_uses_only_published_assignments(container, assignments_repo):
    assignments_repo.add(_assignment("a1", submissions=[_graded("s1", 80)]))
    assignments_repo.add(_assignment("a2", published=False, submissions=[_graded("s1", 10)]))

    [summary] = container.report_service.class_grade_summary("c-math")

    assert len(summary.assignments) == 1
    assert summary.average_grade == pytest.approx(80)


def test_grade_summary_ignores_other_classes(container, assignments_repo):
    assignments_repo.add(_assignment("a1", class_id="c-other", submissions=[_graded("s1", 80)]))

    assert container.report_service.class_grade_summary("c-math") == []


def test_grade_summary_populates_student_display_fields(container, assignments_repo):
    assignments_repo.add(_assignment("a1", submissions=[_graded("s2", 90), _graded("s1", 70)]))

    result = container.report_service.class_grade_summary("c-math")

    assert [s.student.user_id for s in result] == ["s2", "s1"]
    assert result[0].student.first_name == "Grace"
    assert result[1].to_dict()["student"] == {
        "_id": "s1",
        "firstName": "Alan",
        "lastName": "Turing",
        "email": "alan@school.test",
    }


def test_unknown_student_keeps_bare_reference(container, assignments_repo):
    assignments_repo.add(_assignment("a1", submissions=[_graded("ghost", 50)]))

    [summary] = container.report_service.class_grade_summary("c-math")

    assert summary.student.to_dict() == {"_id": "ghost"}


def test_unknown_class_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.report_service.class_grade_summary("nope")
    with pytest.raises(NotFoundError):
        container.report_service.class_attendance_summary("nope")


def test_attendance_summary_counts_per_student(container, sessions_repo):
    sessions_repo.add(_session("x1", 1, ("s1", AttendanceStatus.PRESENT), ("s2", AttendanceStatus.LATE)))
    sessions_repo.add(_session("x2", 2, ("s1", AttendanceStatus.ABSENT), ("s2", AttendanceStatus.EXCUSED)))

    result = container.report_service.class_attendance_summary("c-math")

    by_id = {s.student.user_id: s for s in result}
    assert (by_id["s1"].present, by_id["s1"].absent, by_id["s1"].total_sessions) == (1, 1, 2)
    assert (by_id["s2"].late, by_id["s2"].excused) == (1, 1)
    assert by_id["s2"].student.last_name == "Hopper"


def test_attendance_date_range_applies_when_both_ends_given(container, sessions_repo):
    sessions_repo.add(_session("x1", 1, ("s1", AttendanceStatus.PRESENT)))
    sessions_repo.add(_session("x2", 10, ("s1", AttendanceStatus.ABSENT)))

    [summary] = container.report_service.class_attendance_summary(
        "c-math", start_date="2026-02-05", end_date="2026-02-20"
    )

    assert sessions_repo.last_list_args["date_from"] == datetime(2026, 2, 5)
    assert sessions_repo.last_list_args["date_to"] == datetime(2026, 2, 20)
    assert (summary.total_sessions, summary.absent) == (1, 1)


def test_attendance_single_date_bound_is_ignored(container, sessions_repo):
    sessions_repo.add(_session("x1", 1, ("s1", AttendanceStatus.PRESENT)))
    sessions_repo.add(_session("x2", 10, ("s1", AttendanceStatus.ABSENT)))

    [summary] = container.report_service.class_attendance_summary("c-math", start_date="2026-02-05")

    assert sessions_repo.last_list_args["date_from"] is None
    assert sessions_repo.last_list_args["date_to"] is None
    assert summary.total_sessions == 2


def test_dashboard_stats(container, assignments_repo):
    assignments_repo.add(_assignment("a1", submissions=[_graded("s1", 80), _graded("s2", 60)]))
    assignments_repo.add(_assignment("a2", published=False))

    stats = container.report_service.dashboard_stats()

    assert stats.to_dict() == {
        "totalClasses": 1,
        "totalStudents": 2,
        "totalTeachers": 1,
        "activeAssignments": 1,
        "averageGrade": pytest.approx(70),
    }


def test_dashboard_average_is_zero_without_grades(container):
    assert container.report_service.dashboard_stats().average_grade == 0


def test_grades_csv_has_header_and_one_row_per_student(container, assignments_repo):
    assignments_repo.add(_assignment("a1", submissions=[_graded("s1", 75)]))

    payload = grades_csv(container.report_service.class_grade_summary("c-math"))

    assert payload.startswith(b"\xef\xbb\xbf")
    lines = payload.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("student_id,first_name,last_name")
    assert lines[1] == "s1,Alan,Turing,alan@school.test,1,1,75.00"


def test_attendance_csv_rows(container, sessions_repo):
    sessions_repo.add(_session("x1", 1, ("s2", AttendanceStatus.LATE)))

    payload = attendance_csv(container.report_service.class_attendance_summary("c-math"))

    lines = payload.decode("utf-8-sig").splitlines()
    assert lines[1] == "s2,Grace,Hopper,grace@school.test,1,0,0,1,0"
