"""In-memory repositories satisfying the repository protocols."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Optional

from class_management.assignments.model import Assignment, Grade, Submission
from class_management.classes.model import Enrollment, SchoolClass
from class_management.core.enums import Role, SubmissionStatus
from class_management.sessions.model import ClassSession
from class_management.users.model import User, UserRef


class InMemoryUsers:
    def __init__(self, users: Iterable[User] = ()):
        self._by_id: dict[str, User] = {u.user_id: u for u in users}
        self._next = 1

    def add(self, user: User) -> User:
        self._by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for user in self._by_id.values():
            if user.email == email.lower():
                return user
        return None

    def list(self, *, role=None, is_active=None):
        items = [
            u
            for u in self._by_id.values()
            if (role is None or u.role == role) and (is_active is None or u.is_active == is_active)
        ]
        items.sort(key=lambda u: (u.last_name, u.first_name))
        return items

    def create_user(self, *, first_name, last_name, email, password_hash, role: Role) -> str:
        user_id = f"u{self._next}"
        self._next += 1
        self._by_id[user_id] = User(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=email.lower(),
            password_hash=password_hash,
            role=role,
        )
        return user_id

    def save(self, user: User) -> bool:
        if user.user_id not in self._by_id:
            return False
        self._by_id[user.user_id] = user
        return True

    def get_refs(self, user_ids):
        return {uid: self._by_id[uid].to_ref() for uid in set(user_ids) if uid in self._by_id}


class InMemoryClasses:
    def __init__(self):
        self._by_id: dict[str, SchoolClass] = {}
        self._next = 1
        self._clock = datetime(2026, 1, 1)

    def add(self, school_class: SchoolClass) -> SchoolClass:
        self._by_id[school_class.class_id] = school_class
        return school_class

    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        return self._by_id.get(class_id)

    def list(self, *, teacher_id=None, student_id=None, academic_year=None, semester=None, is_active=None):
        items = [
            c
            for c in self._by_id.values()
            if (teacher_id is None or c.teacher_id == teacher_id)
            and (student_id is None or c.is_enrolled(student_id))
            and (academic_year is None or c.academic_year == academic_year)
            and (semester is None or c.semester == semester)
            and (is_active is None or c.is_active == is_active)
        ]
        items.sort(key=lambda c: c.created_at or datetime.min, reverse=True)
        return items

    def create(self, school_class: SchoolClass) -> str:
        class_id = f"c{self._next}"
        self._next += 1
        self._clock += timedelta(minutes=1)
        self._by_id[class_id] = replace(school_class, class_id=class_id, created_at=self._clock)
        return class_id

    def save(self, school_class: SchoolClass) -> bool:
        stored = self._by_id.get(school_class.class_id)
        if stored is None:
            return False
        self._by_id[school_class.class_id] = replace(school_class, students=stored.students)
        return True

    def add_enrollment(self, class_id: str, enrollment: Enrollment, *, max_students: int) -> bool:
        stored = self._by_id.get(class_id)
        if stored is None or stored.is_enrolled(enrollment.student_id) or len(stored.students) >= max_students:
            return False
        self._by_id[class_id] = replace(stored, students=stored.students + (enrollment,))
        return True

    def remove_enrollment(self, class_id: str, student_id: str) -> bool:
        stored = self._by_id.get(class_id)
        if stored is None:
            return False
        remaining = tuple(e for e in stored.students if e.student_id != student_id)
        self._by_id[class_id] = replace(stored, students=remaining)
        return True

    def delete(self, class_id: str) -> bool:
        return self._by_id.pop(class_id, None) is not None

    def count(self) -> int:
        return len(self._by_id)


class InMemorySessions:
    def __init__(self):
        self._by_id: dict[str, ClassSession] = {}
        self._next = 1
        self.last_list_args: Optional[dict] = None

    def add(self, class_session: ClassSession) -> ClassSession:
        self._by_id[class_session.session_id] = class_session
        return class_session

    def get_by_id(self, session_id: str) -> Optional[ClassSession]:
        return self._by_id.get(session_id)

    def list(self, *, class_id=None, date_from=None, date_to=None, is_completed=None, oldest_first=False):
        self.last_list_args = {"class_id": class_id, "date_from": date_from, "date_to": date_to}
        items = [
            s
            for s in self._by_id.values()
            if (class_id is None or s.class_id == class_id)
            and (date_from is None or s.date >= date_from)
            and (date_to is None or s.date <= date_to)
            and (is_completed is None or s.is_completed == is_completed)
        ]
        items.sort(key=lambda s: s.date, reverse=not oldest_first)
        return items

    def create(self, class_session: ClassSession) -> str:
        session_id = f"sess{self._next}"
        self._next += 1
        self._by_id[session_id] = replace(class_session, session_id=session_id)
        return session_id

    def save(self, class_session: ClassSession) -> bool:
        stored = self._by_id.get(class_session.session_id)
        if stored is None:
            return False
        self._by_id[class_session.session_id] = replace(class_session, attendance=stored.attendance)
        return True

    def replace_attendance(self, session_id: str, attendance) -> bool:
        stored = self._by_id.get(session_id)
        if stored is None:
            return False
        self._by_id[session_id] = replace(stored, attendance=tuple(attendance))
        return True

    def delete(self, session_id: str) -> bool:
        return self._by_id.pop(session_id, None) is not None


class InMemoryAssignments:
    def __init__(self):
        self._by_id: dict[str, Assignment] = {}
        self._next = 1
        self._next_submission = 1

    def add(self, assignment: Assignment) -> Assignment:
        self._by_id[assignment.assignment_id] = assignment
        return assignment

    def get_by_id(self, assignment_id: str) -> Optional[Assignment]:
        return self._by_id.get(assignment_id)

    def list(self, *, class_id=None, assignment_type=None, is_published=None, student_id=None):
        items = [
            a
            for a in self._by_id.values()
            if (class_id is None or a.class_id == class_id)
            and (assignment_type is None or a.type == assignment_type)
            and (is_published is None or a.is_published == is_published)
            and (student_id is None or a.submission_for(student_id) is not None)
        ]
        items.sort(key=lambda a: a.due_date)
        return items

    def create(self, assignment: Assignment) -> str:
        assignment_id = f"a{self._next}"
        self._next += 1
        self._by_id[assignment_id] = replace(assignment, assignment_id=assignment_id)
        return assignment_id

    def save(self, assignment: Assignment) -> bool:
        stored = self._by_id.get(assignment.assignment_id)
        if stored is None:
            return False
        self._by_id[assignment.assignment_id] = replace(assignment, submissions=stored.submissions)
        return True

    def add_submission(self, assignment_id: str, submission: Submission) -> bool:
        stored = self._by_id.get(assignment_id)
        if stored is None or stored.submission_for(submission.student.user_id):
            return False
        submission = replace(submission, submission_id=f"sub{self._next_submission}")
        self._next_submission += 1
        self._by_id[assignment_id] = replace(stored, submissions=stored.submissions + (submission,))
        return True

    def grade_submission(self, assignment_id: str, submission_id: str, grade: Grade) -> bool:
        stored = self._by_id.get(assignment_id)
        if stored is None or not any(s.submission_id == submission_id for s in stored.submissions):
            return False
        submissions = tuple(
            replace(s, grade=grade, status=SubmissionStatus.GRADED) if s.submission_id == submission_id else s
            for s in stored.submissions
        )
        self._by_id[assignment_id] = replace(stored, submissions=submissions)
        return True

    def delete(self, assignment_id: str) -> bool:
        return self._by_id.pop(assignment_id, None) is not None


def student(user_id: str, first: str = "", last: str = "") -> UserRef:
    return UserRef(user_id=user_id, first_name=first or None, last_name=last or None)
