from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_amount, require_non_empty
from ..core.exceptions import (
    ConflictError,
    DuplicatePayment,
    ManualReviewRequired,
    NotFoundError,
    ValidationError,
    VerificationFailed,
)
from ..fees.model import FeeRecord
from ..fees.repository import FeeRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .allocator import PaymentAllocator
from .model import ConfirmationResult, PaymentConfirmation, PaymentReview, VerifiedPayment
from .repository import PaymentReviewRepository
from .verifier import PaymentVerifier

logger = logging.getLogger(__name__)


class PaymentService:
    """Handle a gateway payment confirmation end to end.

    Verification happens before anything touches the ledger. After that the
    payment is always persisted somewhere: as a fee record, or, if allocation
    keeps conflicting, in the review queue.
    """

    def __init__(
        self,
        fees: FeeRepository,
        students: StudentRepository,
        reviews: PaymentReviewRepository,
        verifier: PaymentVerifier,
        *,
        allocator: PaymentAllocator | None = None,
        max_attempts: int = 2,
    ):
        self._fees = fees
        self._students = students
        self._reviews = reviews
        self._verifier = verifier
        self._allocator = allocator or PaymentAllocator()
        self._max_attempts = max(1, int(max_attempts))

    def confirm(self, confirmation: PaymentConfirmation, *, now: Optional[datetime] = None) -> ConfirmationResult:
        now = now or now_local()
        try:
            record = self.process(confirmation, now=now)
        except (ValidationError, NotFoundError) as e:
            logger.warning("Rejected payment confirmation: %s", e)
            return ConfirmationResult(accepted=False, reason=ConfirmationResult.INVALID_INPUT)
        except VerificationFailed:
            return ConfirmationResult(accepted=False, reason=ConfirmationResult.INVALID_SIGNATURE)
        except DuplicatePayment as e:
            logger.info("Payment %s already recorded", e.payment_id)
            existing = self._fees.find_by_payment_id(e.payment_id)
            return ConfirmationResult(accepted=True, reason=ConfirmationResult.DUPLICATE, record=existing)
        except ManualReviewRequired:
            return ConfirmationResult(accepted=True, reason=ConfirmationResult.MANUAL_REVIEW)

        reason = ConfirmationResult.NEEDS_REVIEW if record.needs_review else ConfirmationResult.ACCEPTED
        return ConfirmationResult(accepted=True, reason=reason, record=record)

    def process(self, confirmation: PaymentConfirmation, *, now: datetime) -> FeeRecord:
        """Verify and allocate, raising the domain error that describes the outcome."""

        order_id = require_non_empty(confirmation.order_id, "order_id")
        payment_id = require_non_empty(confirmation.payment_id, "payment_id")
        amount = require_amount(confirmation.amount)
        student_id = require_non_empty(confirmation.student_id, "student_id")

        if not self._verifier.verify(order_id, payment_id, confirmation.signature):
            logger.warning("Signature mismatch for order %s / payment %s", order_id, payment_id)
            raise VerificationFailed(f"Invalid signature for payment {payment_id}")

        student = self._students.get_by_student_id(student_id)
        if not student:
            raise NotFoundError(f"Student {student_id} does not exist")

        parked = self._reviews.find_by_payment_id(payment_id)
        if parked is not None:
            logger.info("Payment %s is already queued for manual review #%s", payment_id, parked.review_id)
            raise ManualReviewRequired(payment_id, f"Payment {payment_id} is already queued for manual review")

        payment = VerifiedPayment(payment_id=payment_id, amount=amount, order_id=order_id)
        try:
            return self._allocate_and_store(student, payment, now)
        except ManualReviewRequired as e:
            self._park(student, payment, reason=str(e), now=now)
            raise

    def _allocate_and_store(self, student: Student, payment: VerifiedPayment, now: datetime) -> FeeRecord:
        for attempt in range(1, self._max_attempts + 1):
            ledger = self._fees.list_for_student(student.student_id)
            record = self._allocator.allocate(student, payment, ledger, now)
            try:
                fee_id = self._fees.insert(record)
            except ConflictError as e:
                if e.reason == ConflictError.DUPLICATE_PAYMENT_ID:
                    raise DuplicatePayment(payment.payment_id) from e
                logger.warning(
                    "Ledger conflict allocating payment %s to %s %s (attempt %d/%d)",
                    payment.payment_id,
                    record.month.value,
                    record.year,
                    attempt,
                    self._max_attempts,
                )
                continue

            logger.info(
                "Fee record created for %s %s (student %s, payment %s)",
                record.month.value,
                record.year,
                student.student_id,
                payment.payment_id,
            )
            return replace(record, fee_id=fee_id)

        raise ManualReviewRequired(
            payment.payment_id,
            f"Payment {payment.payment_id} conflicted {self._max_attempts} times with existing ledger entries",
        )

    def _park(self, student: Student, payment: VerifiedPayment, *, reason: str, now: datetime) -> None:
        review_id = self._reviews.add(
            PaymentReview(
                student_id=student.student_id,
                order_id=payment.order_id or "",
                payment_id=payment.payment_id,
                amount=payment.amount,
                reason=reason,
                flagged_at=now,
            )
        )
        logger.error(
            "Payment %s for student %s (amount %s) queued for manual review #%s",
            payment.payment_id,
            student.student_id,
            payment.amount,
            review_id,
        )

    def open_reviews(self, *, limit: int = 200):
        return list(self._reviews.list_open(limit=limit))
