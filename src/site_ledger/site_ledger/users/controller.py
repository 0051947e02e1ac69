from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.validators import parse_bool
from ..common.web import admin_required, json_body, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = parse_bool(data.get("remember_me"), default=False)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["username"] = s_user.username
        session["role"] = s_user.role.value
        return ok(s_user)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(
            {
                "user_id": session["user_id"],
                "full_name": session.get("name"),
                "username": session.get("username"),
                "role": session.get("role"),
            }
        )

    # Admin: accounts

    def _public(user):
        return {
            "user_id": user.user_id,
            "full_name": user.full_name,
            "username": user.username,
            "role": user.role,
            "is_active": user.is_active,
            "created_at": user.created_at,
        }

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def list_users():
        return ok([_public(u) for u in container.user_service.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def create_user():
        data = json_body()
        user = container.user_service.create_account(
            full_name=data.get("full_name"),
            username=data.get("username"),
            password=data.get("password"),
            role=data.get("role"),
        )
        return ok(_public(user), 201)

    @app.route("/api/users/<int:user_id>/active", methods=["POST"], endpoint="users_set_active")
    @admin_required
    def set_active(user_id: int):
        data = json_body()
        user = container.user_service.set_active(
            user_id,
            is_active=parse_bool(data.get("is_active"), default=True),
            acting_user_id=int(session["user_id"]),
        )
        return ok(_public(user))

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_user(user_id, acting_user_id=int(session["user_id"]))
        return ok()
