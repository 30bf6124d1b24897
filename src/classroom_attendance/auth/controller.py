from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import error_response
from ..core.exceptions import AuthenticationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = request.get_json(silent=True) or {}
        try:
            user = container.auth_service.authenticate(
                body.get("name", ""),
                body.get("email", ""),
                body.get("password", ""),
            )
        except AuthenticationError as e:
            return error_response(e, action="log in")

        session["user"] = {"name": user.name, "email": user.email}
        return jsonify(session["user"])

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    def me():
        if "user" not in session:
            return jsonify({"message": "Login required"}), 401
        return jsonify(session["user"])
