from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PaymentReview


class PaymentReviewRepository(Protocol):
    """Queue of verified payments awaiting manual allocation; one entry per payment id."""

    def add(self, review: PaymentReview) -> int:
        raise NotImplementedError

    def find_by_payment_id(self, payment_id: str) -> Optional[PaymentReview]:
        raise NotImplementedError

    def list_open(self, *, limit: int = 200) -> Sequence[PaymentReview]:
        raise NotImplementedError
