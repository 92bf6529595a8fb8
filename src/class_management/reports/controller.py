from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .export import attendance_csv, grades_csv


def register(app: Flask, container: Container) -> None:
    def _csv_response(payload: bytes, filename: str):
        return app.response_class(
            payload,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/assignments/class/<class_id>/grades", methods=["GET"], endpoint="class_grades")
    def class_grades(class_id: str):
        summaries = container.report_service.class_grade_summary(class_id)
        return jsonify([s.to_dict() for s in summaries])

    @app.route("/api/assignments/class/<class_id>/grades.csv", methods=["GET"], endpoint="class_grades_csv")
    def class_grades_csv(class_id: str):
        summaries = container.report_service.class_grade_summary(class_id)
        return _csv_response(grades_csv(summaries), f"grades_{class_id}.csv")

    @app.route(
        "/api/sessions/class/<class_id>/attendance-summary",
        methods=["GET"],
        endpoint="class_attendance_summary",
    )
    def class_attendance_summary(class_id: str):
        summaries = container.report_service.class_attendance_summary(
            class_id,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return jsonify([s.to_dict() for s in summaries])

    @app.route(
        "/api/sessions/class/<class_id>/attendance-summary.csv",
        methods=["GET"],
        endpoint="class_attendance_summary_csv",
    )
    def class_attendance_summary_csv(class_id: str):
        summaries = container.report_service.class_attendance_summary(
            class_id,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return _csv_response(attendance_csv(summaries), f"attendance_{class_id}.csv")

    @app.route("/api/stats", methods=["GET"], endpoint="dashboard_stats")
    def dashboard_stats():
        return jsonify(container.report_service.dashboard_stats().to_dict())
