from __future__ import annotations

import hashlib
import hmac


def compute_signature(order_id: str, payment_id: str, secret: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``order_id|payment_id`` keyed by ``secret``."""
    payload = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def verify(order_id: str, payment_id: str, signature: str, secret: str) -> bool:
    """True iff ``signature`` is the gateway signature for this order/payment pair.

    Never raises: malformed or missing input is simply not trusted.
    """

    values = (order_id, payment_id, signature, secret)
    if not all(isinstance(v, str) and v for v in values):
        return False

    expected = compute_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


class PaymentVerifier:
    """Binds the gateway key secret from settings."""

    def __init__(self, secret: str):
        self._secret = secret or ""

    def verify(self, order_id: str, payment_id: str, signature: str) -> bool:
        return verify(order_id, payment_id, signature, self._secret)

    def sign(self, order_id: str, payment_id: str) -> str:
        return compute_signature(order_id, payment_id, self._secret)
