from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..academic_calendar.cycle import academic_start_year
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_RECENT_PAYMENTS
from ..fees.repository import FeeRepository
from .model import RevenueReport
from .rollup import rollup


class ReportService:
    def __init__(self, fees: FeeRepository):
        self._fees = fees

    def revenue_report(
        self,
        selected_year: Optional[int] = None,
        *,
        now: Optional[datetime] = None,
        recent_limit: int = DEFAULT_RECENT_PAYMENTS,
    ) -> RevenueReport:
        if selected_year is None:
            selected_year = academic_start_year(now or now_local())

        records = self._fees.list_paid_for_cycle(int(selected_year))
        return RevenueReport(
            rollup=rollup(records, int(selected_year)),
            recent_payments=list(self._fees.list_recent_paid(limit=int(recent_limit))),
            years=sorted({int(y) for y in self._fees.list_years()}, reverse=True),
        )
