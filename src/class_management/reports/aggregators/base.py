from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Optional, TypeVar

from ...core.exceptions import DataIntegrityError
from ...users.model import UserRef

R = TypeVar("R")
S = TypeVar("S")


class SummaryAggregator(ABC, Generic[R, S]):
    """Strategy interface: fold parent records into one summary per student.

    Implementations are pure: no I/O, and all accumulation state lives in
    locals of a single ``aggregate`` call, so one instance can be shared by
    concurrent requests.
    """

    @abstractmethod
    def aggregate(self, records: Iterable[R]) -> list[S]:
        raise NotImplementedError


def student_key(student: Optional[UserRef], *, where: str) -> str:
    """Resolve the grouping key of a nested record, failing fast when absent."""

    user_id = getattr(student, "user_id", None)
    if not user_id:
        raise DataIntegrityError(f"{where} has no student reference")
    return str(user_id)
