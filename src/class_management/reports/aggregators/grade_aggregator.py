from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ...assignments.model import Assignment
from ...core.exceptions import DataIntegrityError
from ...users.model import UserRef
from ..model import GradeLine, GradeSummary
from .base import SummaryAggregator, student_key


@dataclass
class _GradeAccumulator:
    student: UserRef
    lines: list[GradeLine] = field(default_factory=list)
    total_score: float = 0
    total_weight: float = 0

    def freeze(self) -> GradeSummary:
        average = self.total_score / self.total_weight if self.total_weight > 0 else 0
        return GradeSummary(
            student=self.student,
            assignments=tuple(self.lines),
            total_score=self.total_score,
            total_weight=self.total_weight,
            average_grade=average,
        )


class WeightedGradeAggregator(SummaryAggregator[Assignment, GradeSummary]):
    """Weighted average of assignment percentages per student.

    Every student with a submission gets a summary, in first-seen order
    (assignments outer, submissions inner). Only submissions carrying a
    numeric score are listed and counted:

        percentage = score / maxScore * 100
        totalScore += percentage * weight
        totalWeight += weight
        averageGrade = totalScore / totalWeight  (0 when totalWeight is 0)
    """

    def aggregate(self, records: Iterable[Assignment]) -> list[GradeSummary]:
        summary_map: dict[str, _GradeAccumulator] = {}

        for assignment in records:
            for submission in assignment.submissions:
                key = student_key(
                    submission.student,
                    where=f"submission {submission.submission_id or '?'} of assignment {assignment.assignment_id}",
                )
                acc = summary_map.get(key)
                if acc is None:
                    acc = _GradeAccumulator(student=submission.student)
                    summary_map[key] = acc

                score = submission.score
                if score is None:
                    continue

                if not assignment.max_score or assignment.max_score <= 0:
                    raise DataIntegrityError(
                        f"assignment {assignment.assignment_id} has non-positive maxScore {assignment.max_score!r}"
                    )

                percentage = (score / assignment.max_score) * 100
                acc.lines.append(
                    GradeLine(
                        assignment_title=assignment.title,
                        score=score,
                        max_score=assignment.max_score,
                        weight=assignment.weight,
                        percentage=percentage,
                    )
                )
                acc.total_score += percentage * assignment.weight
                acc.total_weight += assignment.weight

        return [acc.freeze() for acc in summary_map.values()]
