from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import bearer_token, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        session = container.access_gate.authenticate(
            data.get("email", ""),
            data.get("password", ""),
            data.get("userType") or data.get("role") or "",
        )
        return jsonify(
            {
                "token": session.token,
                "expires_at": session.expires_at.isoformat(),
                "user": {
                    "email": session.principal_email,
                    "user_type": session.role.value,
                    "emp_id": session.emp_id,
                },
            }
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.access_gate.invalidate(bearer_token())
        return jsonify({"message": "Logged out"})
