from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja import Query
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from common.authentication import TicketingJWTAuth
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import filters, models, schema
from events.controllers.permissions import EventOrganizerPermission
from events.service import capacity_ledger, ticket_service

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{event_id}",
    auth=TicketingJWTAuth(),
    permissions=[EventOrganizerPermission()],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminTicketsController(EventAdminBaseController):
    """Organizer endpoints for the attendee list and manual overrides."""

    @route.get(
        "/availability",
        url_name="event_availability",
        response=schema.AvailabilitySchema,
        throttle=UserDefaultThrottle(),
    )
    def availability(self, event_id: UUID) -> schema.AvailabilitySchema:
        """Current capacity snapshot for the event and each of its tiers."""
        event = self.get_one(event_id)
        event.refresh_from_db(fields=["capacity", "tickets_issued"])
        return schema.AvailabilitySchema(
            event_id=event.pk,
            capacity=event.capacity,
            tickets_issued=event.tickets_issued,
            remaining_capacity=event.remaining_capacity,
            available=capacity_ledger.check_event_availability(event.pk),
            tiers=[schema.TicketTierSchema.from_orm(tier) for tier in event.ticket_tiers.all()],
        )

    @route.get(
        "/tickets",
        url_name="list_tickets",
        response=PaginatedResponseSchema[schema.AdminTicketSchema],
        throttle=UserDefaultThrottle(),
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["attendee_name", "attendee_email", "ticket_code", "tier__name"])
    def list_tickets(
        self,
        event_id: UUID,
        params: filters.TicketFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> QuerySet[models.Ticket]:
        """List tickets for an event, newest first.

        Filter by payment_status, is_validated or tier_id; search by name, email or ticket code.
        """
        event = self.get_one(event_id)
        return params.filter(models.Ticket.objects.full().filter(event=event))

    @route.get(
        "/tickets/{uuid:ticket_id}",
        url_name="get_admin_ticket",
        response=schema.AdminTicketSchema,
        throttle=UserDefaultThrottle(),
    )
    def get_ticket(self, event_id: UUID, ticket_id: UUID) -> models.Ticket:
        event = self.get_one(event_id)
        return self.get_ticket_or_404(event, ticket_id)

    @route.post(
        "/tickets/manual",
        url_name="issue_manual_ticket",
        response={201: schema.AdminTicketSchema},
    )
    def issue_manual_ticket(self, event_id: UUID, payload: schema.ManualTicketSchema) -> tuple[int, models.Ticket]:
        """Issue a paid ticket directly, bypassing email verification.

        Capacity still applies.
        """
        event = self.get_one(event_id)
        tier = get_object_or_404(models.TicketTier, pk=payload.tier_id, event=event) if payload.tier_id else None
        attendee = ticket_service.Attendee(name=payload.name, email=payload.email, phone=payload.phone)
        ticket = ticket_service.issue_manual(event, attendee, issued_by=self.user(), tier=tier)
        return 201, ticket

    @route.post(
        "/tickets/{uuid:ticket_id}/invalidate",
        url_name="invalidate_ticket",
        response=schema.AdminTicketSchema,
        permissions=[EventOrganizerPermission(allow_staff=True)],
    )
    def invalidate_ticket(self, event_id: UUID, ticket_id: UUID) -> models.Ticket:
        """Undo a check-in, e.g. after scanning the wrong ticket."""
        event = self.get_one(event_id)
        ticket = self.get_ticket_or_404(event, ticket_id)
        return ticket_service.invalidate(ticket, actor=self.user())
