from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, duplicate_key_name, first_row
from .model import PaymentReview
from .repository import PaymentReviewRepository

_COLUMNS = "review_id, student_id, order_id, payment_id, amount, reason, flagged_at"


def _row_to_review(r: dict) -> PaymentReview:
    return PaymentReview(
        review_id=int(r["review_id"]),
        student_id=str(r["student_id"]),
        order_id=r["order_id"],
        payment_id=r["payment_id"],
        amount=Decimal(str(r["amount"])),
        reason=r["reason"],
        flagged_at=r["flagged_at"],
    )


class MySQLPaymentReviewRepository(PaymentReviewRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, review: PaymentReview) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payment_reviews(student_id, order_id, payment_id, amount, reason, flagged_at)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        review.student_id,
                        review.order_id,
                        review.payment_id,
                        review.amount,
                        review.reason,
                        review.flagged_at,
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if duplicate_key_name(exc) != "uq_review_payment_id":
                raise
            # parked concurrently by another request; keep the first entry
            existing = self.find_by_payment_id(review.payment_id)
            return int(existing.review_id) if existing else 0

    def find_by_payment_id(self, payment_id: str) -> Optional[PaymentReview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payment_reviews WHERE payment_id=%s", (payment_id,))
            r = first_row(cur)
            return _row_to_review(r) if r else None

    def list_open(self, *, limit: int = 200) -> Sequence[PaymentReview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payment_reviews
                WHERE resolved_at IS NULL
                ORDER BY flagged_at ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_row_to_review(r) for r in all_rows(cur)]
