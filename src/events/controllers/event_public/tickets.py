from uuid import UUID

from django.db import transaction
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from ninja_extra import api_controller, route

from common.throttling import AnonDefaultThrottle, ClaimThrottle
from events import models, schema
from events.exceptions import InvalidTransitionError
from events.service import claim_verifier, ticket_service
from events.utils import create_ticket_qr_png

from .base import EventPublicBaseController


@api_controller("/events", tags=["Tickets"], throttle=ClaimThrottle())
class EventPublicTicketsController(EventPublicBaseController):
    """Ticket claims for attendees who verified their email."""

    @route.post(
        "/{uuid:event_id}/tickets/free",
        url_name="claim_free_ticket",
        response={201: schema.TicketSchema},
    )
    def claim_free_ticket(self, event_id: UUID, payload: schema.TicketClaimSchema) -> tuple[int, models.Ticket]:
        """Claim a ticket for a free event.

        The email must have been verified with /claims/verify within the claim session; one
        verification buys one ticket.
        """
        event = self.get_one(event_id)
        tier = self.get_tier(event, payload.tier_id)
        attendee = ticket_service.Attendee(name=payload.name, email=payload.email, phone=payload.phone)
        with transaction.atomic():
            claim_verifier.consume_verified_claim(payload.email)
            ticket = ticket_service.create_free(event, attendee, tier)
        return 201, ticket

    @route.post(
        "/{uuid:event_id}/tickets/pending",
        url_name="claim_pending_ticket",
        response={201: schema.TicketSchema},
    )
    def claim_pending_ticket(
        self, event_id: UUID, payload: schema.PendingTicketClaimSchema
    ) -> tuple[int, models.Ticket]:
        """Reserve a ticket for a paid event.

        With payment_method=online the ticket waits for the payment confirmation; with
        payment_method=venue the holder pays cash at the door. Unpaid tickets expire after 24 hours.
        """
        event = self.get_one(event_id)
        tier = self.get_tier(event, payload.tier_id)
        attendee = ticket_service.Attendee(name=payload.name, email=payload.email, phone=payload.phone)
        with transaction.atomic():
            claim_verifier.consume_verified_claim(payload.email)
            ticket = ticket_service.create_paid_pending(event, attendee, tier, payment_method=payload.payment_method)
        return 201, ticket


@api_controller("/tickets", tags=["Tickets"], throttle=AnonDefaultThrottle())
class TicketController(EventPublicBaseController):
    """Look up a ticket by its id, the link sent to the attendee."""

    @route.get("/{uuid:ticket_id}", url_name="get_ticket", response=schema.TicketSchema)
    def get_ticket(self, ticket_id: UUID) -> models.Ticket:
        return get_object_or_404(models.Ticket.objects.full(), pk=ticket_id)

    @route.get("/{uuid:ticket_id}/qr", url_name="get_ticket_qr")
    def get_ticket_qr(self, ticket_id: UUID):
        """PNG QR code of the ticket code.

        Paid tickets can always be downloaded; reconciled online payments only while the download
        window is open.
        """
        ticket = get_object_or_404(models.Ticket, pk=ticket_id)
        downloadable = ticket.payment_status == models.Ticket.PaymentStatus.PAID or ticket.download_window_open()
        if not downloadable:
            raise InvalidTransitionError(_("This ticket cannot be downloaded."))
        return HttpResponse(create_ticket_qr_png(ticket), content_type="image/png")
