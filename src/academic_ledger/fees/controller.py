from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import DATE_FORMAT
from ..common.responses import error_response, iso, money
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import FeeRecord, FeeSchedule, StudentFeeReport


def fee_record_to_dict(r: FeeRecord) -> dict:
    return {
        "fee_id": r.fee_id,
        "student_id": r.student_id,
        "student_name": r.student_name,
        "standard": r.standard,
        "month": r.month.value,
        "year": r.year,
        "amount": money(r.amount),
        "method": r.method.value,
        "status": r.status.value,
        "date_paid": iso(r.date_paid),
        "needs_review": r.needs_review,
    }


def schedule_to_dict(s: FeeSchedule) -> dict:
    return {
        "student_id": s.student_id,
        "academic_start_year": s.academic_start_year,
        "total_outstanding": money(s.total_outstanding),
        "months": [
            {
                "month": m.month.value,
                "year": m.year,
                "amount": money(m.amount),
                "status": m.status.value,
                "date_paid": iso(m.date_paid),
                "fee_id": m.fee_id,
            }
            for m in s.months
        ],
    }


def fee_report_to_dict(r: StudentFeeReport) -> dict:
    return {
        "student_id": r.student_id,
        "student_name": r.student_name,
        "standard": r.standard,
        "records": {
            month.value: (
                {"status": "Paid", "amount": money(rec.amount), "date_paid": iso(rec.date_paid), "method": rec.method.value}
                if rec
                else {"status": "Unpaid"}
            )
            for month, rec in r.records.items()
        },
        "total_paid": money(r.total_paid),
        "total_due": money(r.total_due),
        "balance": money(r.balance),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/students/<student_id>/fees", methods=["GET"], endpoint="student_fees")
    def student_fees(student_id: str):
        try:
            schedule = container.fee_service.get_schedule(student_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(schedule_to_dict(schedule))

    @app.route("/students/<student_id>/payments/recent", methods=["GET"], endpoint="student_recent_payments")
    def student_recent_payments(student_id: str):
        rows = container.fee_service.recent_payments(student_id)
        return jsonify([fee_record_to_dict(r) for r in rows])

    @app.route("/fees/manual", methods=["POST"], endpoint="fees_manual")
    def fees_manual():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return error_response(ValidationError("Request body must be a JSON object"))
        try:
            date_paid = data.get("date_paid")
            record = container.fee_service.record_manual_payment(
                student_id=data.get("student_id"),
                month=data.get("month"),
                year=data.get("year"),
                amount=data.get("amount"),
                method=data.get("method"),
                date_paid=datetime.strptime(str(date_paid), DATE_FORMAT) if date_paid else None,
            )
        except ValueError:
            return error_response(ValidationError("date_paid must be YYYY-MM-DD"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "fee": fee_record_to_dict(record)}), 201

    @app.route("/reports/fees", methods=["GET"], endpoint="reports_fees")
    def reports_fees():
        year = request.args.get("year", type=int)
        report = container.fee_service.detailed_report(year)
        return jsonify([fee_report_to_dict(r) for r in report])
