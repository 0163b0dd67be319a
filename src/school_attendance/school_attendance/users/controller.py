from __future__ import annotations

from functools import wraps

from flask import Flask, request, session

from ..common.responses import fail, ok
from ..container import Container


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Unauthorized!", 401)
        return view(*args, **kwargs)

    return wrapper


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        s_user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        session.clear()
        session.permanent = bool(body.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["email"] = s_user.email
        session["role"] = s_user.role.value

        return ok("Success Login", {"id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(
            "Success Get Current User",
            {"id": session["user_id"], "name": session.get("name"), "email": session.get("email"), "role": session.get("role")},
        )

    @app.route("/api/auth/logout", methods=["DELETE"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return ok("Success Logout")
