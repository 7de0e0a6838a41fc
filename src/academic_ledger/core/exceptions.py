class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid (malformed amount, unknown month, ...)."""


class NotFoundError(DomainError):
    """Raised when a referenced student or record does not exist."""


class VerificationFailed(DomainError):
    """Raised when a payment notification signature does not match."""


class DuplicatePayment(DomainError):
    """Raised when a payment id has already been allocated to the ledger."""

    def __init__(self, payment_id: str):
        super().__init__(f"Payment {payment_id} is already recorded")
        self.payment_id = payment_id


class ConflictError(DomainError):
    """Raised by the ledger store when an insert violates a uniqueness constraint.

    ``reason`` is either ``"duplicate_payment_id"`` or ``"duplicate_month"``.
    """

    DUPLICATE_PAYMENT_ID = "duplicate_payment_id"
    DUPLICATE_MONTH = "duplicate_month"

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message or f"Ledger conflict: {reason}")
        self.reason = reason


class ManualReviewRequired(DomainError):
    """Raised when a verified payment could not be allocated automatically."""

    def __init__(self, payment_id: str, message: str = ""):
        super().__init__(message or f"Payment {payment_id} requires manual review")
        self.payment_id = payment_id
