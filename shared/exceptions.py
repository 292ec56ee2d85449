"""
Error taxonomy shared by the booking, lease and payment contexts.

Every domain error carries a machine readable ``code`` which is what the
payment event processor records against a notification and what the API
returns to callers.
"""


class RentalCoreError(Exception):
    """Base exception for all domain errors."""

    default_code = "ERROR"

    def __init__(self, message: str = "", *, code: str | None = None):
        self.code = code or self.default_code
        super().__init__(message or self.code)


class NotFoundError(RentalCoreError):
    """Raised when a tenant, property or booking does not exist."""

    default_code = "NOT_FOUND"


class ConflictError(RentalCoreError):
    """Raised when a claim cannot be granted (property taken, tenant busy, race lost)."""

    default_code = "CONFLICT"


class InvalidStateError(RentalCoreError):
    """Raised when a transition is attempted on a terminal or mismatched booking."""

    default_code = "INVALID_TRANSITION"


class DuplicateEventError(RentalCoreError):
    """Raised internally when a payment notification was already recorded."""

    default_code = "ALREADY_PROCESSED"
