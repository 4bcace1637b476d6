from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, json_body, ok
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.farmer_service

    def _fields(data: dict) -> dict:
        return {
            "name": data.get("name", ""),
            "code": data.get("code", ""),
            "contact": data.get("contact", ""),
            "bank_id": data.get("bank_id"),
            "branch_id": data.get("branch_id"),
        }

    @app.route("/api/farmers", methods=["GET"], endpoint="list_farmers")
    def list_farmers():
        branch_id = optional_int(request.args.get("branch_id"), "branch_id")
        return ok(service.list_all(branch_id=branch_id))

    @app.route("/api/farmers/<int:farmer_id>", methods=["GET"], endpoint="get_farmer")
    def get_farmer(farmer_id: int):
        return ok(service.get(farmer_id))

    @app.route("/api/farmers", methods=["POST"], endpoint="add_farmer")
    def add_farmer():
        farmer = service.create(**_fields(json_body()), actor=current_actor())
        return ok(farmer, 201)

    @app.route("/api/farmers/<int:farmer_id>", methods=["PUT"], endpoint="update_farmer")
    def update_farmer(farmer_id: int):
        farmer = service.update(farmer_id, **_fields(json_body()), actor=current_actor())
        return ok(farmer)

    @app.route("/api/farmers/<int:farmer_id>", methods=["DELETE"], endpoint="delete_farmer")
    def delete_farmer(farmer_id: int):
        service.delete(farmer_id, actor=current_actor())
        return ok(message="Farmer deleted")
