from uuid import UUID

from ninja import FilterSchema

from events.models import Ticket


class TicketFilterSchema(FilterSchema):
    """Filter schema for the organizer's attendee list."""

    payment_status: Ticket.PaymentStatus | None = None
    is_validated: bool | None = None
    tier_id: UUID | None = None
