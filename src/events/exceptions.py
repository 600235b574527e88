"""Domain errors raised by the ticketing services.

Every error carries a stable ``ErrorCode`` and a message that is safe to show to end users.
The API layer maps them to HTTP responses in ``api.exception_handlers``.
"""

from datetime import datetime
from enum import StrEnum

from django.utils.translation import gettext_lazy as _


class ErrorCode(StrEnum):
    CAPACITY_EXCEEDED = "capacity_exceeded"
    INACTIVE_TIER = "inactive_tier"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    ALREADY_USED = "already_used"
    UNAUTHORIZED = "unauthorized"
    VERIFICATION_FAILED = "verification_failed"
    CHALLENGE_RATE_LIMITED = "challenge_rate_limited"
    STORE_CONFLICT = "store_conflict"


class TicketingError(Exception):
    code: ErrorCode
    status_code: int = 400
    default_message = _("The request could not be completed.")

    def __init__(self, message: str | None = None) -> None:
        self.message = str(message or self.default_message)
        super().__init__(self.message)


class CapacityExceededError(TicketingError):
    code = ErrorCode.CAPACITY_EXCEEDED
    status_code = 409
    default_message = _("This event is sold out.")


class InactiveTierError(TicketingError):
    code = ErrorCode.INACTIVE_TIER
    status_code = 400
    default_message = _("This ticket tier is not on sale.")


class NotFoundError(TicketingError):
    code = ErrorCode.NOT_FOUND
    status_code = 404
    default_message = _("Not found.")


class InvalidTransitionError(TicketingError):
    code = ErrorCode.INVALID_TRANSITION
    status_code = 409
    default_message = _("The ticket is not in a state that allows this action.")


class AlreadyUsedError(TicketingError):
    code = ErrorCode.ALREADY_USED
    status_code = 409
    default_message = _("Ticket already used.")

    def __init__(self, message: str | None = None, *, validated_at: datetime | None = None) -> None:
        self.validated_at = validated_at
        super().__init__(message)


class UnauthorizedError(TicketingError):
    code = ErrorCode.UNAUTHORIZED
    status_code = 403
    default_message = _("You are not allowed to do this.")


class VerificationFailedError(TicketingError):
    code = ErrorCode.VERIFICATION_FAILED
    status_code = 400
    default_message = _("Verification failed.")


class ChallengeRateLimitedError(TicketingError):
    code = ErrorCode.CHALLENGE_RATE_LIMITED
    status_code = 429
    default_message = _("Too many verification codes requested. Try again later.")


class StoreConflictError(TicketingError):
    code = ErrorCode.STORE_CONFLICT
    status_code = 409
    default_message = _("The ticket was modified concurrently. Please retry.")
