from __future__ import annotations

from flask import Flask

from ..common.http import current_actor, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.branch_service

    @app.route("/api/branches", methods=["GET"], endpoint="list_branches")
    def list_branches():
        return ok(service.list_all())

    @app.route("/api/branches/<int:branch_id>", methods=["GET"], endpoint="get_branch")
    def get_branch(branch_id: int):
        return ok(service.get(branch_id))

    @app.route("/api/branches", methods=["POST"], endpoint="add_branch")
    def add_branch():
        data = json_body()
        branch = service.create(
            name=data.get("name", ""),
            address=data.get("address"),
            contact=data.get("contact"),
            actor=current_actor(),
        )
        return ok(branch, 201)

    @app.route("/api/branches/<int:branch_id>", methods=["PUT"], endpoint="update_branch")
    def update_branch(branch_id: int):
        data = json_body()
        branch = service.update(
            branch_id,
            name=data.get("name", ""),
            address=data.get("address"),
            contact=data.get("contact"),
            actor=current_actor(),
        )
        return ok(branch)

    @app.route("/api/branches/<int:branch_id>", methods=["DELETE"], endpoint="delete_branch")
    def delete_branch(branch_id: int):
        service.delete(branch_id, actor=current_actor())
        return ok(message="Branch deleted")
