from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import current_actor, json_body, ok
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payment_service

    def _range():
        return {
            "start_date": parse_optional_date(request.args.get("start"), "start"),
            "end_date": parse_optional_date(request.args.get("end"), "end"),
        }

    @app.route("/api/payments/farmers", methods=["GET"], endpoint="list_farmer_payments")
    def list_farmer_payments():
        farmer_id = optional_int(request.args.get("farmer_id"), "farmer_id")
        return ok(service.list_farmer_payments(farmer_id=farmer_id, **_range()))

    @app.route("/api/payments/farmers", methods=["POST"], endpoint="add_farmer_payment")
    def add_farmer_payment():
        return ok(service.record_farmer_payment(json_body(), actor=current_actor()), 201)

    @app.route("/api/payments/farmers/<int:payment_id>", methods=["GET"], endpoint="get_farmer_payment")
    def get_farmer_payment(payment_id: int):
        return ok(service.get_farmer_payment(payment_id))

    @app.route("/api/payments/farmers/<int:payment_id>", methods=["PUT"], endpoint="update_farmer_payment")
    def update_farmer_payment(payment_id: int):
        return ok(service.update_farmer_payment(payment_id, json_body(), actor=current_actor()))

    @app.route("/api/payments/farmers/<int:payment_id>", methods=["DELETE"], endpoint="delete_farmer_payment")
    def delete_farmer_payment(payment_id: int):
        service.delete_farmer_payment(payment_id, actor=current_actor())
        return ok(message="Payment deleted")

    @app.route("/api/farmers/<int:farmer_id>/balance", methods=["GET"], endpoint="farmer_balance")
    def farmer_balance(farmer_id: int):
        return ok(service.farmer_balance(farmer_id))

    @app.route("/api/payments/customers", methods=["GET"], endpoint="list_customer_payments")
    def list_customer_payments():
        customer_id = optional_int(request.args.get("customer_id"), "customer_id")
        return ok(service.list_customer_payments(customer_id=customer_id, **_range()))

    @app.route("/api/payments/customers", methods=["POST"], endpoint="add_customer_payment")
    def add_customer_payment():
        return ok(service.record_customer_payment(json_body(), actor=current_actor()), 201)

    @app.route("/api/payments/customers/<int:payment_id>", methods=["GET"], endpoint="get_customer_payment")
    def get_customer_payment(payment_id: int):
        return ok(service.get_customer_payment(payment_id))

    @app.route("/api/payments/customers/<int:payment_id>", methods=["PUT"], endpoint="update_customer_payment")
    def update_customer_payment(payment_id: int):
        return ok(service.update_customer_payment(payment_id, json_body(), actor=current_actor()))

    @app.route("/api/payments/customers/<int:payment_id>", methods=["DELETE"], endpoint="delete_customer_payment")
    def delete_customer_payment(payment_id: int):
        service.delete_customer_payment(payment_id, actor=current_actor())
        return ok(message="Payment deleted")

    @app.route("/api/customers/<int:customer_id>/balance", methods=["GET"], endpoint="customer_balance")
    def customer_balance(customer_id: int):
        return ok(service.customer_balance(customer_id))
