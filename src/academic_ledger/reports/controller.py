from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import money
from ..container import Container
from ..fees.controller import fee_record_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/reports/revenue", methods=["GET"], endpoint="reports_revenue")
    def reports_revenue():
        report = container.report_service.revenue_report(request.args.get("year", type=int))
        r = report.rollup
        return jsonify(
            {
                "selected_year": r.selected_year,
                "monthly_revenue": {m.value: money(v) for m, v in r.monthly_totals.items()},
                "standard_stats": {k: {"total": money(v.total), "count": v.count} for k, v in r.per_standard_totals.items()},
                "method_stats": {m.value: c for m, c in r.per_method_counts.items()},
                "total_revenue": money(r.grand_total),
                "payment_count": r.payment_count,
                "average_revenue": money(r.average_per_payment),
                "recent_payments": [fee_record_to_dict(p) for p in report.recent_payments],
                "years": report.years,
            }
        )
