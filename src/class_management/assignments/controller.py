from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import acting_user_id, bool_arg, json_body, json_message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/assignments", methods=["GET"], endpoint="list_assignments")
    def list_assignments():
        assignments = container.assignment_service.list_assignments(
            class_id=request.args.get("class"),
            assignment_type=request.args.get("type"),
            is_published=bool_arg("isPublished"),
            student_id=request.args.get("student"),
        )
        return jsonify([a.to_dict() for a in assignments])

    @app.route("/api/assignments/<assignment_id>", methods=["GET"], endpoint="get_assignment")
    def get_assignment(assignment_id: str):
        return jsonify(container.assignment_service.get_assignment(assignment_id).to_dict())

    @app.route("/api/assignments", methods=["POST"], endpoint="create_assignment")
    def create_assignment():
        return jsonify(container.assignment_service.create_assignment(json_body()).to_dict()), 201

    @app.route("/api/assignments/<assignment_id>", methods=["PUT"], endpoint="update_assignment")
    def update_assignment(assignment_id: str):
        assignment = container.assignment_service.update_assignment(assignment_id, json_body())
        return jsonify(assignment.to_dict())

    @app.route("/api/assignments/<assignment_id>", methods=["DELETE"], endpoint="delete_assignment")
    def delete_assignment(assignment_id: str):
        container.assignment_service.delete_assignment(assignment_id)
        return json_message("Assignment removed")

    @app.route("/api/assignments/<assignment_id>/submit", methods=["POST"], endpoint="submit_assignment")
    def submit_assignment(assignment_id: str):
        body = json_body()
        assignment = container.assignment_service.submit(
            assignment_id,
            student_id=acting_user_id(body, "student"),
            files=body.get("files"),
        )
        return jsonify(assignment.to_dict())

    @app.route(
        "/api/assignments/<assignment_id>/grade/<submission_id>",
        methods=["PUT"],
        endpoint="grade_submission",
    )
    def grade_submission(assignment_id: str, submission_id: str):
        body = json_body()
        assignment = container.assignment_service.grade(
            assignment_id,
            submission_id,
            score=body.get("score"),
            feedback=body.get("feedback"),
            graded_by=acting_user_id(body, "gradedBy"),
        )
        return jsonify(assignment.to_dict())
