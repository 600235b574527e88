from .claim import ClaimChallenge
from .event import Event
from .ticket import (
    CASH_AT_VENUE_REF,
    MANUAL_ISSUE_REF,
    PAY_AT_VENUE_REF,
    TICKET_CODE_REGEX,
    PaymentMethod,
    Ticket,
    TicketTier,
)

__all__ = [
    "CASH_AT_VENUE_REF",
    "ClaimChallenge",
    "Event",
    "MANUAL_ISSUE_REF",
    "PAY_AT_VENUE_REF",
    "PaymentMethod",
    "TICKET_CODE_REGEX",
    "Ticket",
    "TicketTier",
]
