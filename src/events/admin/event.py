# src/events/admin/event.py
"""Admin class for Event."""

from django.contrib import admin
from unfold.admin import ModelAdmin

from events import models
from events.admin.base import TicketTierInline, UserLinkMixin


@admin.register(models.Event)
class EventAdmin(ModelAdmin, UserLinkMixin):  # type: ignore[misc]
    list_display = ["title", "organizer_link", "start", "is_free", "price", "capacity", "tickets_issued"]
    list_filter = ["is_free", "start"]
    search_fields = ["title", "venue", "organizer__username", "organizer__email"]
    autocomplete_fields = ["organizer"]
    readonly_fields = ["id", "tickets_issued", "created_at", "updated_at"]
    date_hierarchy = "start"
    inlines = [TicketTierInline]
