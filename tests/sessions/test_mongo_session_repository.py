from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest
from bson import ObjectId

from class_management.core.enums import AttendanceStatus
from class_management.core.exceptions import DataIntegrityError
from class_management.database.mongo_base import SESSIONS
from class_management.reports.aggregators.attendance_aggregator import StatusCountAggregator
from class_management.sessions.model import AttendanceRecord, ClassSession
from class_management.sessions.mongo_session_repository import MongoSessionRepository
from class_management.users.model import UserRef

CLASS_ID = str(ObjectId())
TEACHER_ID = str(ObjectId())
ALAN = str(ObjectId())
GRACE = str(ObjectId())


@pytest.fixture
def repo(mongo_conn) -> MongoSessionRepository:
    return MongoSessionRepository(mongo_conn)


def _record(student_id, status):
    return AttendanceRecord(student=UserRef(user_id=student_id), status=status, recorded_by=TEACHER_ID)


def test_document_round_trip(repo):
    session_id = repo.create(
        ClassSession(
            session_id="",
            class_id=CLASS_ID,
            date=datetime(2026, 2, 3, 9, 0),
            start_time="09:00",
            topic="Limits",
            attendance=(_record(ALAN, AttendanceStatus.LATE),),
        )
    )

    loaded = repo.get_by_id(session_id)

    assert (loaded.class_id, loaded.date, loaded.topic) == (CLASS_ID, datetime(2026, 2, 3, 9, 0), "Limits")
    [record] = loaded.attendance
    assert record.student.user_id == ALAN
    assert record.status is AttendanceStatus.LATE
    assert record.recorded_by == TEACHER_ID


def test_unknown_stored_status_is_kept_raw_and_rejected_by_summary(repo, mongo_conn):
    inserted = mongo_conn.collection(SESSIONS).insert_one(
        {
            "class": ObjectId(CLASS_ID),
            "date": datetime(2026, 2, 3),
            "attendance": [{"student": ObjectId(ALAN), "status": "sick", "recordedBy": ObjectId(TEACHER_ID)}],
        }
    )

    loaded = repo.get_by_id(str(inserted.inserted_id))

    assert loaded.attendance[0].status == "sick"
    with pytest.raises(DataIntegrityError, match="sick"):
        StatusCountAggregator().aggregate([loaded])


def test_replace_attendance_swaps_the_whole_sheet(repo):
    session_id = repo.create(
        ClassSession(
            session_id="",
            class_id=CLASS_ID,
            date=datetime(2026, 2, 3),
            attendance=(_record(ALAN, AttendanceStatus.ABSENT),),
        )
    )

    assert repo.replace_attendance(session_id, (_record(GRACE, AttendanceStatus.PRESENT),))

    [record] = repo.get_by_id(session_id).attendance
    assert (record.student.user_id, record.status) == (GRACE, AttendanceStatus.PRESENT)


def test_save_leaves_attendance_alone(repo):
    session_id = repo.create(ClassSession(session_id="", class_id=CLASS_ID, date=datetime(2026, 2, 3)))
    stale = repo.get_by_id(session_id)
    repo.replace_attendance(session_id, (_record(ALAN, AttendanceStatus.PRESENT),))

    assert repo.save(replace(stale, is_completed=True))

    stored = repo.get_by_id(session_id)
    assert stored.is_completed is True
    assert [r.student.user_id for r in stored.attendance] == [ALAN]


def test_list_applies_inclusive_date_bounds_oldest_first(repo):
    for day in (1, 5, 10):
        repo.create(ClassSession(session_id="", class_id=CLASS_ID, date=datetime(2026, 2, day)))

    found = repo.list(class_id=CLASS_ID, date_from=datetime(2026, 2, 1), date_to=datetime(2026, 2, 5), oldest_first=True)

    assert [s.date.day for s in found] == [1, 5]
    assert [s.date.day for s in repo.list(class_id=CLASS_ID)] == [10, 5, 1]
