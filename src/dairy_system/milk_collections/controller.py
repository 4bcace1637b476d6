from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import current_actor, json_body, ok
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.collection_service

    @app.route("/api/milk-collections", methods=["GET"], endpoint="list_collections")
    def list_collections():
        rows = service.list_all(
            start_date=parse_optional_date(request.args.get("start"), "start"),
            end_date=parse_optional_date(request.args.get("end"), "end"),
            farmer_id=optional_int(request.args.get("farmer_id"), "farmer_id"),
        )
        return ok(rows)

    @app.route("/api/milk-collections/<int:collection_id>", methods=["GET"], endpoint="get_collection")
    def get_collection(collection_id: int):
        return ok(service.get(collection_id))

    @app.route("/api/milk-collections", methods=["POST"], endpoint="add_collection")
    def add_collection():
        collection = service.create(json_body(), actor=current_actor())
        return ok(collection, 201)

    @app.route("/api/milk-collections/<int:collection_id>", methods=["PUT"], endpoint="update_collection")
    def update_collection(collection_id: int):
        collection = service.update(collection_id, json_body(), actor=current_actor())
        return ok(collection)

    @app.route("/api/milk-collections/<int:collection_id>", methods=["DELETE"], endpoint="delete_collection")
    def delete_collection(collection_id: int):
        service.delete(collection_id, actor=current_actor())
        return ok(message="Milk collection deleted")
