from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, json_body, ok
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        branch_id = optional_int(request.args.get("branch_id"), "branch_id")
        return ok(service.list_all(branch_id=branch_id))

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        return ok(service.get(employee_id))

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    def add_employee():
        data = json_body()
        employee = service.create(
            name=data.get("name", ""),
            contact=data.get("contact", ""),
            branch_id=data.get("branch_id"),
            role=data.get("role"),
            actor=current_actor(),
        )
        return ok(employee, 201)

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: int):
        data = json_body()
        employee = service.update(
            employee_id,
            name=data.get("name", ""),
            contact=data.get("contact", ""),
            branch_id=data.get("branch_id"),
            role=data.get("role"),
            actor=current_actor(),
        )
        return ok(employee)

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        service.delete(employee_id, actor=current_actor())
        return ok(message="Employee deleted")
