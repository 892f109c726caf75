from __future__ import annotations

from datetime import timedelta

from flask import Flask, request, session

from ..common.web import error, login_required, success
from ..core.exceptions import AuthenticationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except AuthenticationError as e:
            return error(str(e), 401)

        session.clear()
        session.permanent = bool(data.get("remember"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return success(s_user.to_dict(), "Logged in")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return success(None, "Logged out")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return success(
            {
                "user_id": int(session["user_id"]),
                "full_name": session.get("name"),
                "role": session.get("role"),
            }
        )
