"""Example: use the service layer without Flask.

Controllers are a thin layer; the summaries come straight from ReportService.
"""

import importlib
import sys

from class_management.config import get_settings_module
from class_management.container import build_container


def main(class_id: str) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(mongo_config=settings.MONGO_CONFIG)

    for summary in container.report_service.class_grade_summary(class_id):
        print(summary.student.user_id, f"{summary.average_grade:.1f}")
    for summary in container.report_service.class_attendance_summary(class_id):
        print(summary.student.user_id, summary.present, "/", summary.total_sessions)


if __name__ == "__main__":
    main(sys.argv[1])
