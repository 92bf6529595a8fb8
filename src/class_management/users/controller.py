from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import bool_arg, json_body, json_message
from ..common.validators import parse_enum
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        body = json_body()
        role = parse_enum(Role, body.get("role") or Role.STUDENT.value, "role")
        user = container.auth_service.register(
            first_name=body.get("firstName"),
            last_name=body.get("lastName"),
            email=body.get("email"),
            password=body.get("password"),
            role=role,
        )
        return jsonify(user.to_dict()), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        body = json_body()
        s_user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return jsonify({"_id": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return json_message("Logged out")

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        users = container.user_service.list_users(role=request.args.get("role"), is_active=bool_arg("isActive"))
        return jsonify([u.to_dict() for u in users])

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: str):
        return jsonify(container.user_service.get_user(user_id).to_dict())

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="update_user")
    def update_user(user_id: str):
        user = container.user_service.update_user(user_id, json_body())
        return jsonify(user.to_dict())

    @app.route("/api/users/role/<role>", methods=["GET"], endpoint="users_by_role")
    def users_by_role(role: str):
        return jsonify([u.to_dict() for u in container.user_service.list_by_role(role)])
