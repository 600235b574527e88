"""Ticket, tier and payment schemas."""

import typing as t
from datetime import datetime
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import UUID4, AwareDatetime, EmailStr, Field, StringConstraints

from common.schema import OneToOneFiftyString, StrippedString
from events.models import Event, PaymentMethod, Ticket, TicketTier


class MinimalEventSchema(ModelSchema):
    class Meta:
        model = Event
        fields = ["id", "title", "venue", "start", "is_free", "price", "currency"]


class TicketTierSchema(ModelSchema):
    remaining_capacity: int | None = None

    class Meta:
        model = TicketTier
        fields = ["id", "name", "price", "capacity", "tickets_sold", "is_active", "is_early_bird"]


class TicketClaimSchema(Schema):
    name: OneToOneFiftyString
    email: EmailStr
    phone: t.Annotated[StrippedString, Field(max_length=32)] = ""
    tier_id: UUID4 | None = None


class PendingTicketClaimSchema(TicketClaimSchema):
    payment_method: PaymentMethod = PaymentMethod.ONLINE


class ManualTicketSchema(TicketClaimSchema):
    pass


class TicketSchema(ModelSchema):
    """The attendee's view of a ticket."""

    event: MinimalEventSchema
    tier_name: str | None = None
    download_window_open: bool = False
    download_window_closes_at: AwareDatetime | None = None

    class Meta:
        model = Ticket
        fields = [
            "id",
            "ticket_code",
            "attendee_name",
            "payment_status",
            "is_validated",
            "validated_at",
            "verified_at",
            "created_at",
        ]

    @staticmethod
    def resolve_tier_name(obj: Ticket) -> str | None:
        return obj.tier.name if obj.tier_id else None

    @staticmethod
    def resolve_download_window_open(obj: Ticket) -> bool:
        return obj.download_window_open()

    @staticmethod
    def resolve_download_window_closes_at(obj: Ticket) -> datetime | None:
        return obj.download_window_closes_at()


class AdminTicketSchema(TicketSchema):
    """Organizer view: adds contact and payment details."""

    attendee_email: str
    attendee_phone: str
    payment_ref_id: str | None = None
    validated_by_id: int | None = None


class PaymentConfirmationSchema(Schema):
    ticket_id: UUID4
    payment_ref: t.Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class AvailabilitySchema(Schema):
    event_id: UUID
    capacity: int | None
    tickets_issued: int
    remaining_capacity: int | None
    available: bool
    tiers: list[TicketTierSchema]


class SweepResultSchema(Schema):
    expired: int
