from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import bool_arg, json_body, json_message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    def list_classes():
        classes = container.class_service.list_classes(
            teacher_id=request.args.get("teacher"),
            student_id=request.args.get("student"),
            academic_year=request.args.get("academicYear"),
            semester=request.args.get("semester"),
            is_active=bool_arg("isActive"),
        )
        return jsonify([c.to_dict() for c in classes])

    @app.route("/api/classes/<class_id>", methods=["GET"], endpoint="get_class")
    def get_class(class_id: str):
        return jsonify(container.class_service.get_class(class_id).to_dict())

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    def create_class():
        school_class = container.class_service.create_class(json_body())
        return jsonify(school_class.to_dict()), 201

    @app.route("/api/classes/<class_id>", methods=["PUT"], endpoint="update_class")
    def update_class(class_id: str):
        return jsonify(container.class_service.update_class(class_id, json_body()).to_dict())

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="delete_class")
    def delete_class(class_id: str):
        container.class_service.delete_class(class_id)
        return json_message("Class removed")

    @app.route("/api/classes/<class_id>/enroll", methods=["POST"], endpoint="enroll_student")
    def enroll_student(class_id: str):
        body = json_body()
        school_class = container.class_service.enroll(class_id, body.get("studentId"))
        return jsonify(school_class.to_dict())

    @app.route("/api/classes/<class_id>/enroll/<student_id>", methods=["DELETE"], endpoint="unenroll_student")
    def unenroll_student(class_id: str, student_id: str):
        return jsonify(container.class_service.unenroll(class_id, student_id).to_dict())
