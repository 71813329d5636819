from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..container import Container
from .model import Principal, public_profile
from .session import current_principal, login_required, store_principal


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = request.get_json(silent=True) or {}
        user = container.user_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=data.get("role"),
            department=data.get("department"),
        )
        store_principal(Principal.from_employee(user))
        return jsonify({"message": "Registered successfully", "user": public_profile(user)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = request.get_json(silent=True) or {}
        principal = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("rememberMe"))
        store_principal(principal)

        user = container.auth_service.current_user(principal)
        return jsonify({"message": "Logged in successfully", "user": public_profile(user)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        user = container.auth_service.current_user(current_principal())
        return jsonify({"user": public_profile(user)})
