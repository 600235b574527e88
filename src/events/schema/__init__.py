"""Events schema package."""

from .claim import (
    ClaimChallengeIssuedSchema,
    ClaimChallengeRequestSchema,
    ClaimChallengeVerifySchema,
    ClaimVerifiedSchema,
)
from .scan import ScannedTicketSchema, ScanRequestSchema, ScanResultSchema
from .ticket import (
    AdminTicketSchema,
    AvailabilitySchema,
    ManualTicketSchema,
    MinimalEventSchema,
    PaymentConfirmationSchema,
    PendingTicketClaimSchema,
    SweepResultSchema,
    TicketClaimSchema,
    TicketSchema,
    TicketTierSchema,
)

__all__ = [
    "AdminTicketSchema",
    "AvailabilitySchema",
    "ClaimChallengeIssuedSchema",
    "ClaimChallengeRequestSchema",
    "ClaimChallengeVerifySchema",
    "ClaimVerifiedSchema",
    "ManualTicketSchema",
    "MinimalEventSchema",
    "PaymentConfirmationSchema",
    "PendingTicketClaimSchema",
    "ScanRequestSchema",
    "ScanResultSchema",
    "ScannedTicketSchema",
    "SweepResultSchema",
    "TicketClaimSchema",
    "TicketSchema",
    "TicketTierSchema",
]
