from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import json_body, login_required
from ..container import Container

_PASSWORD_FAILURE_STATUS = {"User not found": 404, "Failed to update password": 500}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.login(
            str(data.get("userId", "")).strip(),
            str(data.get("password", "")),
            str(data.get("role", "")).strip(),
        )

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return jsonify(
            {
                "success": True,
                "user": s_user.to_dict(),
                "redirectUrl": container.auth_service.redirect_for(s_user.role),
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.auth_service.logout(session.get("user_id"))
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "userId": session["user_id"],
                "name": session.get("name"),
                "role": session.get("role"),
                "redirectUrl": container.auth_service.redirect_for(session.get("role")),
            }
        )

    @app.route("/api/password", methods=["POST"], endpoint="update_password")
    @login_required
    def update_password():
        data = json_body()
        result = container.auth_service.update_password(
            str(data.get("currentPassword", "")),
            str(data.get("newPassword", "")),
            user_id=session["user_id"],
        )
        if result.success:
            return jsonify(result.to_dict())
        return jsonify(result.to_dict()), _PASSWORD_FAILURE_STATUS.get(result.message, 400)
