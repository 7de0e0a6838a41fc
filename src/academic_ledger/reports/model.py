from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ..core.enums import AcademicMonth, PaymentMethod
from ..fees.model import FeeRecord


@dataclass(frozen=True)
class StandardTotal:
    total: Decimal = Decimal("0")
    count: int = 0


@dataclass(frozen=True)
class RevenueRollup:
    selected_year: int
    monthly_totals: dict[AcademicMonth, Decimal]
    per_standard_totals: dict[str, StandardTotal]
    per_method_counts: dict[PaymentMethod, int]
    grand_total: Decimal
    payment_count: int
    average_per_payment: Decimal


@dataclass(frozen=True)
class RevenueReport:
    rollup: RevenueRollup
    recent_payments: list[FeeRecord] = field(default_factory=list)
    years: list[int] = field(default_factory=list)
