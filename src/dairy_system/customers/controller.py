from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, json_body, ok
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.customer_service

    @app.route("/api/customers", methods=["GET"], endpoint="list_customers")
    def list_customers():
        branch_id = optional_int(request.args.get("branch_id"), "branch_id")
        return ok(service.list_all(branch_id=branch_id))

    @app.route("/api/customers/<int:customer_id>", methods=["GET"], endpoint="get_customer")
    def get_customer(customer_id: int):
        return ok(service.get(customer_id))

    @app.route("/api/customers", methods=["POST"], endpoint="add_customer")
    def add_customer():
        data = json_body()
        customer = service.create(
            name=data.get("name", ""),
            contact=data.get("contact", ""),
            branch_id=data.get("branch_id"),
            actor=current_actor(),
        )
        return ok(customer, 201)

    @app.route("/api/customers/<int:customer_id>", methods=["PUT"], endpoint="update_customer")
    def update_customer(customer_id: int):
        data = json_body()
        customer = service.update(
            customer_id,
            name=data.get("name", ""),
            contact=data.get("contact", ""),
            branch_id=data.get("branch_id"),
            actor=current_actor(),
        )
        return ok(customer)

    @app.route("/api/customers/<int:customer_id>", methods=["DELETE"], endpoint="delete_customer")
    def delete_customer(customer_id: int):
        service.delete(customer_id, actor=current_actor())
        return ok(message="Customer deleted")
