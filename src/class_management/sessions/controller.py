from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import bool_arg, json_body, json_message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    def list_sessions():
        sessions = container.session_service.list_sessions(
            class_id=request.args.get("class"),
            date=request.args.get("date"),
            is_completed=bool_arg("isCompleted"),
        )
        return jsonify([s.to_dict() for s in sessions])

    @app.route("/api/sessions/<session_id>", methods=["GET"], endpoint="get_session")
    def get_session(session_id: str):
        return jsonify(container.session_service.get_session(session_id).to_dict())

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    def create_session():
        return jsonify(container.session_service.create_session(json_body()).to_dict()), 201

    @app.route("/api/sessions/<session_id>", methods=["PUT"], endpoint="update_session")
    def update_session(session_id: str):
        return jsonify(container.session_service.update_session(session_id, json_body()).to_dict())

    @app.route("/api/sessions/<session_id>", methods=["DELETE"], endpoint="delete_session")
    def delete_session(session_id: str):
        container.session_service.delete_session(session_id)
        return json_message("Session removed")

    @app.route("/api/sessions/<session_id>/attendance", methods=["POST"], endpoint="record_attendance")
    def record_attendance(session_id: str):
        body = json_body()
        class_session = container.session_service.record_attendance(session_id, body.get("attendance"))
        return jsonify(class_session.to_dict())
