from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, ClassSession


class SessionRepository(Protocol):
    def get_by_id(self, session_id: str) -> Optional[ClassSession]:
        raise NotImplementedError

    def list(
        self,
        *,
        class_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        is_completed: Optional[bool] = None,
        oldest_first: bool = False,
    ) -> Sequence[ClassSession]:
        """Sessions matching the filters (date bounds inclusive), newest first by default."""

        raise NotImplementedError

    def create(self, class_session: ClassSession) -> str:
        raise NotImplementedError

    def save(self, class_session: ClassSession) -> bool:
        """Persist the session's own fields; the attendance sheet is left untouched."""

        raise NotImplementedError

    def replace_attendance(self, session_id: str, attendance: tuple[AttendanceRecord, ...]) -> bool:
        raise NotImplementedError

    def delete(self, session_id: str) -> bool:
        raise NotImplementedError
