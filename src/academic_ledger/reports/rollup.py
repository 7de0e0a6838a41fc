from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..academic_calendar.cycle import ACADEMIC_MONTHS, in_cycle
from ..core.enums import PaymentMethod
from ..fees.model import FeeRecord
from .model import RevenueRollup, StandardTotal

_ZERO = Decimal("0")
_CENTS = Decimal("0.01")


def rollup(fee_records: Iterable[FeeRecord], selected_year: int) -> RevenueRollup:
    """Revenue for the cycle May ``selected_year`` .. April ``selected_year + 1``.

    Only Paid entries count. A record listed twice (same fee_id) is counted once.
    """

    monthly = {month: _ZERO for month in ACADEMIC_MONTHS}
    standards: dict[str, list] = {}
    methods = {method: 0 for method in PaymentMethod}
    grand_total = _ZERO
    count = 0
    seen_ids: set[int] = set()

    for rec in fee_records:
        if not rec.is_paid or not in_cycle(rec.month, rec.year, selected_year):
            continue
        if rec.fee_id is not None:
            if rec.fee_id in seen_ids:
                continue
            seen_ids.add(rec.fee_id)

        amount = Decimal(rec.amount)
        monthly[rec.month] += amount
        s = standards.setdefault(rec.standard, [_ZERO, 0])
        s[0] += amount
        s[1] += 1
        methods[rec.method] = methods.get(rec.method, 0) + 1
        grand_total += amount
        count += 1

    average = (grand_total / count).quantize(_CENTS, rounding=ROUND_HALF_UP) if count else _ZERO
    return RevenueRollup(
        selected_year=int(selected_year),
        monthly_totals=monthly,
        per_standard_totals={k: StandardTotal(total=v[0], count=v[1]) for k, v in sorted(standards.items())},
        per_method_counts=methods,
        grand_total=grand_total,
        payment_count=count,
        average_per_payment=average,
    )
