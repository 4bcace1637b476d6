from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import current_actor, json_body, ok
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.sale_service

    @app.route("/api/sales", methods=["GET"], endpoint="list_sales")
    def list_sales():
        rows = service.list_all(
            start_date=parse_optional_date(request.args.get("start"), "start"),
            end_date=parse_optional_date(request.args.get("end"), "end"),
            customer_id=optional_int(request.args.get("customer_id"), "customer_id"),
        )
        return ok(rows)

    @app.route("/api/sales/<int:sale_id>", methods=["GET"], endpoint="get_sale")
    def get_sale(sale_id: int):
        return ok(service.get(sale_id))

    @app.route("/api/sales", methods=["POST"], endpoint="add_sale")
    def add_sale():
        return ok(service.create(json_body(), actor=current_actor()), 201)

    @app.route("/api/sales/<int:sale_id>", methods=["PUT"], endpoint="update_sale")
    def update_sale(sale_id: int):
        return ok(service.update(sale_id, json_body(), actor=current_actor()))

    @app.route("/api/sales/<int:sale_id>", methods=["DELETE"], endpoint="delete_sale")
    def delete_sale(sale_id: int):
        service.delete(sale_id, actor=current_actor())
        return ok(message="Sale deleted")
