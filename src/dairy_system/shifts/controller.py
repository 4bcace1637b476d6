from __future__ import annotations

from flask import Flask

from ..common.http import current_actor, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    def list_shifts():
        return ok(service.list_all())

    @app.route("/api/shifts/<int:shift_id>", methods=["GET"], endpoint="get_shift")
    def get_shift(shift_id: int):
        return ok(service.get(shift_id))

    @app.route("/api/shifts", methods=["POST"], endpoint="add_shift")
    def add_shift():
        data = json_body()
        shift = service.create(
            name=data.get("name", ""),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            actor=current_actor(),
        )
        return ok(shift, 201)

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT"], endpoint="update_shift")
    def update_shift(shift_id: int):
        data = json_body()
        shift = service.update(
            shift_id,
            name=data.get("name", ""),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            actor=current_actor(),
        )
        return ok(shift)

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    def delete_shift(shift_id: int):
        service.delete(shift_id, actor=current_actor())
        return ok(message="Shift deleted")
