from __future__ import annotations

from datetime import datetime

import mongomock
import pytest
from werkzeug.security import generate_password_hash

from class_management.classes.model import SchoolClass
from class_management.container import wire
from class_management.core.enums import Role, Semester
from class_management.database.connection import DatabaseConnection, MongoConfig
from class_management.main import create_app
from class_management.users.model import User
from fakes import InMemoryAssignments, InMemoryClasses, InMemorySessions, InMemoryUsers


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def teacher() -> User:
    return User(
        user_id="t1",
        first_name="Ada",
        last_name="Lovelace",
        email="ada@school.test",
        role=Role.TEACHER,
        password_hash=generate_password_hash("secret1"),
    )


@pytest.fixture
def users_repo(teacher) -> InMemoryUsers:
    return InMemoryUsers(
        [
            teacher,
            User(user_id="s1", first_name="Alan", last_name="Turing", email="alan@school.test", role=Role.STUDENT),
            User(user_id="s2", first_name="Grace", last_name="Hopper", email="grace@school.test", role=Role.STUDENT),
        ]
    )


@pytest.fixture
def classes_repo(teacher) -> InMemoryClasses:
    repo = InMemoryClasses()
    repo.add(
        SchoolClass(
            class_id="c-math",
            name="Algebra I",
            subject="Math",
            teacher_id=teacher.user_id,
            academic_year="2025-2026",
            semester=Semester.SPRING,
            created_at=datetime(2025, 12, 1),
        )
    )
    return repo


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def assignments_repo() -> InMemoryAssignments:
    return InMemoryAssignments()


@pytest.fixture
def container(users_repo, classes_repo, sessions_repo, assignments_repo):
    return wire(
        users_repo=users_repo,
        classes_repo=classes_repo,
        sessions_repo=sessions_repo,
        assignments_repo=assignments_repo,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="class_management.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mongo_conn() -> DatabaseConnection:
    config = MongoConfig(uri="mongodb://localhost:27017", database="class-management-test")
    return DatabaseConnection(config, client=mongomock.MongoClient())
