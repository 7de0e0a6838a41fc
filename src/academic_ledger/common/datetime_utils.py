from __future__ import annotations

import calendar
from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date:
    """YYYY-MM-DD to date; raises ValueError otherwise."""
    return datetime.strptime(str(value).strip(), DATE_FORMAT).date()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def now_local() -> datetime:
    # single clock for services; tests pass ``now`` explicitly
    return datetime.now()
