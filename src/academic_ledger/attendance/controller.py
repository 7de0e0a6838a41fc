from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import error_response, optional_date_arg
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import AttendanceSummary


def summary_to_dict(s: AttendanceSummary) -> dict:
    return {
        "student_id": s.student_id,
        "present": s.present_count,
        "absent": s.absent_count,
        "total": s.total_counted_days,
        "percentage": s.percentage,
        "is_defaulter": s.is_defaulter,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/students/<student_id>/attendance", methods=["GET"], endpoint="student_attendance")
    def student_attendance(student_id: str):
        try:
            summary = container.attendance_service.student_summary(
                student_id,
                start=optional_date_arg("start"),
                end=optional_date_arg("end"),
            )
        except ValueError:
            return error_response(ValidationError("Dates must be YYYY-MM-DD"))
        except DomainError as e:
            return error_response(e)
        return jsonify(summary_to_dict(summary))

    @app.route("/attendance/<day>", methods=["POST"], endpoint="attendance_save_day")
    def attendance_save_day(day: str):
        data = request.get_json(silent=True) or {}
        marks = data.get("marks") if isinstance(data, dict) else None
        try:
            if not isinstance(marks, dict):
                raise ValidationError("marks must map student ids to P/A/H")
            saved = container.attendance_service.record_day(parse_iso_date(day), marks)
        except ValueError:
            return error_response(ValidationError("Date must be YYYY-MM-DD"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "saved": saved})

    @app.route("/attendance/defaulters/<int:year>/<int:month>", methods=["GET"], endpoint="attendance_defaulters")
    def attendance_defaulters(year: int, month: int):
        try:
            rows = container.attendance_service.monthly_defaulters(year, month)
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "year": year,
                "month": month,
                "threshold": container.attendance_service.threshold,
                "defaulters": [
                    {"student_name": r.student_name, "mobile_no": r.mobile_no, **summary_to_dict(r.summary)}
                    for r in rows
                ],
            }
        )

    @app.route("/attendance/detailed", methods=["GET"], endpoint="attendance_detailed")
    def attendance_detailed():
        try:
            matrix = container.attendance_service.detailed_report(
                start=optional_date_arg("start"),
                end=optional_date_arg("end"),
            )
        except ValueError:
            return error_response(ValidationError("Dates must be YYYY-MM-DD"))
        return jsonify(
            {
                "dates": [d.isoformat() for d in matrix.all_dates],
                "report": [
                    {
                        "student_id": row.student_id,
                        "student_name": row.student_name,
                        "records": {d.isoformat(): m.value for d, m in row.marks.items()},
                        "present_count": row.present_count,
                        "total_recorded_days": row.total_recorded_days,
                    }
                    for row in matrix.rows
                ],
            }
        )
