"""Door scanner schemas."""

from uuid import UUID

from ninja import Schema
from pydantic import AwareDatetime

from events.service.entry_validator import ScanOutcome, ScanResult


class ScanRequestSchema(Schema):
    # length is bounded by the validator so over-long input reports invalid_format
    code: str


class ScannedTicketSchema(Schema):
    id: UUID
    ticket_code: str
    attendee_name: str
    payment_status: str
    tier_name: str | None = None
    event_title: str


class ScanResultSchema(Schema):
    outcome: ScanOutcome
    message: str
    validated_at: AwareDatetime | None = None
    ticket: ScannedTicketSchema | None = None

    @classmethod
    def from_result(cls, result: ScanResult) -> "ScanResultSchema":
        ticket = None
        if result.ticket is not None and result.outcome != ScanOutcome.UNAUTHORIZED:
            ticket = ScannedTicketSchema(
                id=result.ticket.id,
                ticket_code=result.ticket.ticket_code,
                attendee_name=result.ticket.attendee_name,
                payment_status=result.ticket.payment_status,
                tier_name=result.ticket.tier.name if result.ticket.tier_id else None,
                event_title=result.ticket.event.title,
            )
        return cls(outcome=result.outcome, message=result.message, validated_at=result.validated_at, ticket=ticket)
