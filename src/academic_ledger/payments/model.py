from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..fees.model import FeeRecord


@dataclass(frozen=True)
class PaymentConfirmation:
    """Inbound gateway callback, as posted by the checkout page."""

    order_id: str
    payment_id: str
    signature: str
    amount: object
    student_id: str


@dataclass(frozen=True)
class VerifiedPayment:
    payment_id: str
    amount: Decimal
    order_id: Optional[str] = None


@dataclass(frozen=True)
class PaymentReview:
    """A verified payment that could not be allocated to a month automatically."""

    student_id: str
    order_id: str
    payment_id: str
    amount: Decimal
    reason: str
    flagged_at: datetime
    review_id: Optional[int] = None


@dataclass(frozen=True)
class ConfirmationResult:
    accepted: bool
    reason: Optional[str] = None
    record: Optional[FeeRecord] = None

    ACCEPTED = "allocated"
    NEEDS_REVIEW = "needs_review"
    DUPLICATE = "duplicate_payment"
    MANUAL_REVIEW = "manual_review_required"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_INPUT = "invalid_input"

    def to_dict(self) -> dict:
        data: dict = {"accepted": self.accepted}
        if self.reason:
            data["reason"] = self.reason
        if self.record is not None:
            data["month"] = self.record.month.value
            data["year"] = self.record.year
            data["fee_id"] = self.record.fee_id
        return data
