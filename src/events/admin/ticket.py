# src/events/admin/ticket.py
"""Admin classes for Ticket, TicketTier and ClaimChallenge."""

from django.contrib import admin, messages
from django.db.models import QuerySet
from django.http import HttpRequest
from unfold.admin import ModelAdmin

from events import models
from events.admin.base import EventLinkMixin
from events.service import expiry_sweeper


@admin.register(models.TicketTier)
class TicketTierAdmin(ModelAdmin, EventLinkMixin):  # type: ignore[misc]
    list_display = ["name", "event_link", "price", "capacity", "tickets_sold", "is_active", "is_early_bird"]
    list_filter = ["is_active", "is_early_bird"]
    search_fields = ["name", "event__title"]
    autocomplete_fields = ["event"]
    readonly_fields = ["tickets_sold"]


@admin.register(models.Ticket)
class TicketAdmin(ModelAdmin, EventLinkMixin):  # type: ignore[misc]
    """Lifecycle fields are read-only here; transitions go through the ticket service."""

    list_display = [
        "ticket_code",
        "event_link",
        "attendee_name",
        "tier_name",
        "payment_status",
        "is_validated",
        "validated_at",
        "created_at",
    ]
    list_filter = ["payment_status", "is_validated"]
    search_fields = ["ticket_code", "attendee_name", "attendee_email", "event__title"]
    readonly_fields = [
        "id",
        "ticket_code",
        "event",
        "tier",
        "payment_status",
        "payment_ref_id",
        "is_validated",
        "validated_at",
        "validated_by",
        "verified_at",
        "expired_at",
        "created_at",
    ]
    date_hierarchy = "created_at"
    actions = ["expire_stale_tickets"]

    def has_add_permission(self, request: HttpRequest) -> bool:
        # tickets are only issued through the ticket service
        return False

    @admin.display(description="Tier")
    def tier_name(self, obj: models.Ticket) -> str | None:
        return obj.tier.name if obj.tier else None

    @admin.action(description="Expire selected stale tickets")
    def expire_stale_tickets(self, request: HttpRequest, queryset: QuerySet[models.Ticket]) -> None:
        expired = expiry_sweeper.sweep(queryset=queryset)  # type: ignore[arg-type]
        self.message_user(request, f"{expired} ticket(s) expired.", messages.SUCCESS)


@admin.register(models.ClaimChallenge)
class ClaimChallengeAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["email", "created_at", "expires_at", "verified", "used_at", "attempts"]
    list_filter = ["verified"]
    search_fields = ["email"]
    exclude = ["code_hash"]
    readonly_fields = ["email", "expires_at", "verified", "verified_at", "used_at", "attempts"]
