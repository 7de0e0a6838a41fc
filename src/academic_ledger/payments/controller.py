from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import iso, money
from ..container import Container
from .model import ConfirmationResult, PaymentConfirmation


def register(app: Flask, container: Container) -> None:
    @app.route("/payments/confirm", methods=["POST"], endpoint="payments_confirm")
    def payments_confirm():
        data = request.get_json(silent=True)
        if data is None:
            data = request.form.to_dict()
        if not isinstance(data, dict):
            rejected = ConfirmationResult(accepted=False, reason=ConfirmationResult.INVALID_INPUT)
            return jsonify(rejected.to_dict()), 400
        confirmation = PaymentConfirmation(
            order_id=data.get("order_id"),
            payment_id=data.get("payment_id"),
            signature=data.get("signature"),
            amount=data.get("amount"),
            student_id=data.get("student_id"),
        )
        result = container.payment_service.confirm(confirmation)
        return jsonify(result.to_dict()), (200 if result.accepted else 400)

    @app.route("/payments/reviews", methods=["GET"], endpoint="payments_reviews")
    def payments_reviews():
        reviews = container.payment_service.open_reviews()
        return jsonify(
            [
                {
                    "review_id": r.review_id,
                    "student_id": r.student_id,
                    "order_id": r.order_id,
                    "payment_id": r.payment_id,
                    "amount": money(r.amount),
                    "reason": r.reason,
                    "flagged_at": iso(r.flagged_at),
                }
                for r in reviews
            ]
        )
