from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import bearer_token, json_body
from ..container import Container
from .model import JobRole


def role_json(role: JobRole) -> dict:
    return {"id": role.id, "role_name": role.role_name, "description": role.description}


def register(app: Flask, container: Container) -> None:
    service = container.role_service

    @app.route("/admin/roles", methods=["GET"], endpoint="list_roles")
    def list_roles():
        return jsonify([role_json(r) for r in service.list_roles(bearer_token())])

    @app.route("/admin/roles", methods=["POST"], endpoint="create_role")
    def create_role():
        data = json_body()
        role = service.create_role(
            bearer_token(),
            role_name=data.get("role_name", ""),
            description=data.get("description"),
        )
        return jsonify(role_json(role)), 201

    @app.route("/admin/roles/<int:role_id>", methods=["GET"], endpoint="get_role")
    def get_role(role_id: int):
        return jsonify(role_json(service.get_role(bearer_token(), role_id)))

    @app.route("/admin/roles/<int:role_id>", methods=["PUT"], endpoint="update_role")
    def update_role(role_id: int):
        return jsonify(role_json(service.update_role(bearer_token(), role_id, json_body())))

    @app.route("/admin/roles/<int:role_id>", methods=["DELETE"], endpoint="delete_role")
    def delete_role(role_id: int):
        service.delete_role(bearer_token(), role_id)
        return jsonify({"message": "Role deleted"})
