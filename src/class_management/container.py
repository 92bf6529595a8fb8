from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.mongo_assignment_repository import MongoAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .classes.mongo_class_repository import MongoClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .database.connection import DatabaseConnection, MongoConfig
from .reports.service import ReportService
from .sessions.mongo_session_repository import MongoSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .users.mongo_user_repository import MongoUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    classes_repo: ClassRepository
    sessions_repo: SessionRepository
    assignments_repo: AssignmentRepository

    auth_service: AuthService
    user_service: UserService
    class_service: ClassService
    session_service: SessionService
    assignment_service: AssignmentService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    classes_repo: ClassRepository,
    sessions_repo: SessionRepository,
    assignments_repo: AssignmentRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any set of repositories (MongoDB or in-memory)."""

    return Container(
        users_repo=users_repo,
        classes_repo=classes_repo,
        sessions_repo=sessions_repo,
        assignments_repo=assignments_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        class_service=ClassService(classes_repo, users_repo),
        session_service=SessionService(sessions_repo, classes_repo),
        assignment_service=AssignmentService(assignments_repo, classes_repo),
        report_service=ReportService(assignments_repo, sessions_repo, classes_repo, users_repo),
        conn=conn,
    )


def build_container(*, mongo_config: dict) -> Container:
    config = MongoConfig(
        uri=str(mongo_config["uri"]),
        database=str(mongo_config["database"]),
        server_selection_timeout_ms=int(mongo_config.get("server_selection_timeout_ms", 5000)),
        socket_timeout_ms=int(mongo_config.get("socket_timeout_ms", 45000)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire(
        users_repo=MongoUserRepository(conn),
        classes_repo=MongoClassRepository(conn),
        sessions_repo=MongoSessionRepository(conn),
        assignments_repo=MongoAssignmentRepository(conn),
        conn=conn,
    )
